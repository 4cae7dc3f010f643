"""
Image View Binding

Toolkit-independent image view state: the current image, placeholder and
error images, and the load task bound to the view. Starting a new load or
tearing the view down cancels the previous one; a cancelled load never
touches the view but still populates the cache.
"""

import asyncio
import logging
from typing import Callable, Optional, Union

import httpx

from ..errors import InvalidURLError, LoadCancelledError, SnapKitError
from ..image import DecodedImage
from ..image_loader.cancellation import CancellationToken
from ..image_loader.loader import ImageLoader, parse_url

logger = logging.getLogger(__name__)


class ImageView:
    """
    Holds the displayed image for one view.

    Usage:
        view = ImageView(loader, placeholder_image=placeholder)
        task = view.load("https://example.com/photo.jpg")
        await task
        view.image  # loaded image, or error/placeholder image on failure
    """

    def __init__(
        self,
        loader: ImageLoader,
        placeholder_image: Optional[DecodedImage] = None,
        error_image: Optional[DecodedImage] = None,
        on_image_changed: Optional[Callable[[Optional[DecodedImage]], None]] = None,
    ):
        self.loader = loader
        self.error_image = error_image
        self.on_image_changed = on_image_changed

        self._image: Optional[DecodedImage] = None
        self._placeholder_image: Optional[DecodedImage] = None
        self._token: Optional[CancellationToken] = None
        self._task: Optional[asyncio.Task] = None

        self.placeholder_image = placeholder_image

    @property
    def image(self) -> Optional[DecodedImage]:
        return self._image

    @image.setter
    def image(self, value: Optional[DecodedImage]) -> None:
        self._image = value
        if self.on_image_changed is not None:
            self.on_image_changed(value)

    @property
    def placeholder_image(self) -> Optional[DecodedImage]:
        return self._placeholder_image

    @placeholder_image.setter
    def placeholder_image(self, value: Optional[DecodedImage]) -> None:
        self._placeholder_image = value
        if self._image is None and value is not None:
            self.image = value

    @property
    def is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    def load(
        self,
        url: Union[httpx.URL, str, None],
        placeholder: Optional[DecodedImage] = None,
    ) -> Optional[asyncio.Task]:
        """
        Start loading url into this view.

        Args:
            url: Image URL, URL string, or None
            placeholder: Shown while loading (defaults to placeholder_image)

        Returns:
            The load task, or None when url is missing or invalid
        """
        self.cancel_loading()

        if isinstance(url, str):
            try:
                url = parse_url(url)
            except InvalidURLError:
                logger.warning(f"[ImageView] Invalid URL: {url[:60]}")
                url = None

        if url is None:
            self.image = self.error_image or self.placeholder_image
            return None

        shown = placeholder or self.placeholder_image
        if shown is not None:
            self.image = shown

        token = CancellationToken()
        self._token = token
        self._task = asyncio.get_running_loop().create_task(self._run(url, token))
        return self._task

    async def _run(self, url: httpx.URL, token: CancellationToken) -> None:
        try:
            loaded = await self.loader.load(url, token=token)
        except LoadCancelledError:
            return
        except SnapKitError as e:
            if token.is_cancelled:
                return
            logger.info(f"[ImageView] Load failed, showing fallback: {e}")
            self.image = self.error_image or self.placeholder_image
            return

        if token.is_cancelled:
            return
        self.image = loaded

    def cancel_loading(self) -> None:
        """Cancel the current load, if any. Its result will not be applied."""
        if self._token is not None:
            self._token.cancel()
        self._token = None
        self._task = None

    def close(self) -> None:
        """Tear down the view."""
        self.cancel_loading()
