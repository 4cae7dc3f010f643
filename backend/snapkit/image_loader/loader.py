"""
Image Loader

Async "get bytes for URL, decode, cache, return" with the memory cache
consulted before any network access.

Handles:
- URL string parsing (InvalidURLError, no network access)
- Cache lookup by canonical URL string
- Status validation (2xx only) and decoding
- Cooperative cancellation through CancellationToken
- Optional single-flight de-duplication of concurrent misses
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

import httpx

from ..cache.memory_store import ImageCache
from ..errors import (
    DownloadFailedError,
    InvalidHTTPResponse,
    InvalidURLError,
    LoadCancelledError,
    SnapKitError,
)
from ..image import DecodedImage
from .cancellation import CancellationToken
from .decoder import PillowDecoder
from .transport import HttpTransport

logger = logging.getLogger(__name__)

URLLike = Union[httpx.URL, str]


def parse_url(url_string: str) -> httpx.URL:
    """
    Parse an image URL string.

    Raises:
        InvalidURLError: whitespace, unparsable, non-http(s) scheme or no host.
    """
    if not url_string or any(ch.isspace() for ch in url_string):
        raise InvalidURLError(url_string)

    try:
        url = httpx.URL(url_string)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidURLError(url_string) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(url_string)
    return url


@dataclass(frozen=True)
class LoadRequest:
    """A single load: the URL and its cache key."""
    url: httpx.URL
    cache_key: str

    @classmethod
    def from_url(cls, url: URLLike) -> "LoadRequest":
        if isinstance(url, str):
            url = parse_url(url)
        return cls(url=url, cache_key=str(url))


class ImageLoader:
    """
    Loads remote images through the memory cache.

    Usage:
        loader = ImageLoader(cache=cache, transport=HttpxTransport(config))
        image = await loader.load("https://example.com/photo.jpg")
    """

    def __init__(
        self,
        cache: ImageCache,
        transport: HttpTransport,
        decoder: Optional[PillowDecoder] = None,
        deduplicate_requests: bool = False,
    ):
        self.cache = cache
        self.transport = transport
        self.decoder = decoder or PillowDecoder()
        self.deduplicate_requests = deduplicate_requests

        # cache_key -> shared download task (single-flight only)
        self._in_flight: Dict[str, "asyncio.Task[DecodedImage]"] = {}

    async def load(
        self,
        url: URLLike,
        token: Optional[CancellationToken] = None,
    ) -> DecodedImage:
        """
        Load image from URL with caching.

        Args:
            url: httpx.URL or URL string
            token: Optional cancellation token; once cancelled the result is discarded

        Returns:
            DecodedImage (the cached object on a hit)

        Raises:
            InvalidURLError: url string could not be parsed
            DownloadFailedError: transport failure or non-2xx status
            InvalidImageDataError: body is not a decodable image
            LoadCancelledError: token was cancelled; result discarded
        """
        request = LoadRequest.from_url(url)

        cached = self.cache.retrieve(request.cache_key)
        if cached is not None:
            logger.debug(f"[ImageLoader] Cache hit: {request.cache_key[:60]}")
            return cached

        if self.deduplicate_requests:
            pending = self._shared_download(request)
        else:
            pending = self._download(request)

        # Fetch and decode are the suspension points; the token is checked once
        # they are done so the cache write is never skipped
        try:
            image = await pending
        except SnapKitError:
            self._raise_if_cancelled(request, token)
            raise
        self._raise_if_cancelled(request, token)
        return image

    async def _shared_download(self, request: LoadRequest) -> DecodedImage:
        """Join an in-flight download for the same key, or start one."""
        task = self._in_flight.get(request.cache_key)
        if task is None:
            task = asyncio.ensure_future(self._download(request))
            self._in_flight[request.cache_key] = task
            task.add_done_callback(
                lambda done, key=request.cache_key: self._forget_shared(key, done)
            )
        else:
            logger.debug(f"[ImageLoader] Joining in-flight download: {request.cache_key[:60]}")

        # shield: one caller going away must not abort the download for the others
        return await asyncio.shield(task)

    def _forget_shared(self, key: str, task: "asyncio.Task[DecodedImage]") -> None:
        self._in_flight.pop(key, None)
        # Every caller may have gone away; mark a failure as seen
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"[ImageLoader] Shared download failed: {key[:60]} - {task.exception()}")

    async def _download(self, request: LoadRequest) -> DecodedImage:
        """Fetch, validate, decode and cache one image."""
        logger.info(f"[ImageLoader] Downloading: {request.cache_key[:60]}...")

        try:
            response = await self.transport.fetch(request.url)
        except SnapKitError:
            raise
        except Exception as e:
            raise DownloadFailedError(e) from e

        if not 200 <= response.status_code <= 299:
            logger.error(
                f"[ImageLoader] HTTP error {response.status_code}: {request.cache_key[:60]}..."
            )
            raise DownloadFailedError(InvalidHTTPResponse(response.status_code))

        image = await asyncio.to_thread(self.decoder.decode, response.content)
        self.cache.store(image, request.cache_key)

        logger.info(
            f"[ImageLoader] Loaded: {request.cache_key[:40]}... "
            f"({len(response.content)//1024}KB, {image.pixel_width}x{image.pixel_height})"
        )
        return image

    @staticmethod
    def _raise_if_cancelled(
        request: LoadRequest,
        token: Optional[CancellationToken],
    ) -> None:
        if token is not None and token.is_cancelled:
            logger.debug(f"[ImageLoader] Discarding cancelled load: {request.cache_key[:60]}")
            raise LoadCancelledError(request.cache_key)

    def cancel_all_tasks(self) -> int:
        """
        Cancel all pending downloads (best effort).

        Returns:
            Number of requests signalled.
        """
        return self.transport.cancel_all()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.aclose()

    async def __aenter__(self) -> "ImageLoader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
