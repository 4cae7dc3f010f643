"""
Image Decoder

Turns downloaded bytes into decoded bitmaps with Pillow.
"""

import logging
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ..errors import InvalidImageDataError
from ..image import DecodedImage

logger = logging.getLogger(__name__)


class PillowDecoder:
    """
    Decodes image bytes with Pillow.

    Usage:
        decoder = PillowDecoder(scale=2.0)
        image = decoder.decode(data)
    """

    def __init__(self, scale: float = 1.0):
        if scale <= 0:
            raise ValueError("scale must be > 0")
        self.scale = scale

    def decode(self, data: bytes) -> DecodedImage:
        """
        Decode raw bytes into a DecodedImage.

        Raises:
            InvalidImageDataError: empty, unrecognised or corrupt data.
        """
        if not data:
            raise InvalidImageDataError("Empty image data")

        try:
            img = Image.open(BytesIO(data))
            # Image.open is lazy; force a full decode so truncated data fails here
            img.load()
        except UnidentifiedImageError as e:
            logger.warning(f"[ImageDecoder] Unrecognised image data ({len(data)} bytes)")
            raise InvalidImageDataError("Unrecognised image format") from e
        except Exception as e:
            logger.warning(f"[ImageDecoder] Corrupt image data ({len(data)} bytes): {e}")
            raise InvalidImageDataError(f"Corrupt image data: {e}") from e

        return DecodedImage(image=img, scale=self.scale)
