"""
SnapKit

Image loading with an in-memory decoded-image cache.

Features:
- Bounded LRU memory cache (item count + total cost)
- Async cache-first loader over httpx, decoding with Pillow
- Cooperative cancellation and toolkit-independent view binding
- CDN URL builder
"""

from .cache import ImageCache, CacheEntry, MemoryPressureNotifier
from .cdn import CDNConfig, ImageParams, build_url, build_sized_url
from .config import SnapKitConfig
from .errors import (
    SnapKitError,
    InvalidURLError,
    InvalidHTTPResponse,
    DownloadFailedError,
    InvalidImageDataError,
    LoadCancelledError,
)
from .factory import create_image_loader
from .image import DecodedImage, image_cost
from .image_loader import (
    CancellationToken,
    FetchResponse,
    HttpTransport,
    HttpxTransport,
    ImageLoader,
    LoadRequest,
    PillowDecoder,
    parse_url,
)
from .views import ImageView

__version__ = "1.0.0"

__all__ = [
    "ImageCache",
    "CacheEntry",
    "MemoryPressureNotifier",
    "CDNConfig",
    "ImageParams",
    "build_url",
    "build_sized_url",
    "SnapKitConfig",
    "SnapKitError",
    "InvalidURLError",
    "InvalidHTTPResponse",
    "DownloadFailedError",
    "InvalidImageDataError",
    "LoadCancelledError",
    "create_image_loader",
    "DecodedImage",
    "image_cost",
    "CancellationToken",
    "FetchResponse",
    "HttpTransport",
    "HttpxTransport",
    "ImageLoader",
    "LoadRequest",
    "PillowDecoder",
    "parse_url",
    "ImageView",
]
