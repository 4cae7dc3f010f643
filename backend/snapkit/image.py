"""
Decoded Image

Opaque wrapper around a decoded bitmap. Consumers only rely on pixel
dimensions, scale factor and the derived cost; the pixel format is whatever
the decoder produced.
"""

from dataclasses import dataclass

from PIL import Image


def image_cost(pixel_width: int, pixel_height: int, scale: float = 1.0) -> int:
    """Memory cost proxy: width * height * scale^2, rounded."""
    return int(round(pixel_width * pixel_height * scale * scale))


@dataclass(eq=False)
class DecodedImage:
    """A decoded bitmap plus the scale factor it should be displayed at."""
    image: Image.Image
    scale: float = 1.0

    @property
    def pixel_width(self) -> int:
        return self.image.width

    @property
    def pixel_height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def cost(self) -> int:
        return image_cost(self.pixel_width, self.pixel_height, self.scale)
