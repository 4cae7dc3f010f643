"""
Image Loader Module

Async image loading on top of the memory cache.

Features:
- Cache-first loading keyed by canonical URL string
- httpx transport with cancel-all support
- Pillow decoding
- Cooperative cancellation and optional single-flight
"""

from .cancellation import CancellationToken
from .decoder import PillowDecoder
from .loader import ImageLoader, LoadRequest, parse_url
from .transport import FetchResponse, HttpTransport, HttpxTransport

__all__ = [
    "CancellationToken",
    "PillowDecoder",
    "ImageLoader",
    "LoadRequest",
    "parse_url",
    "FetchResponse",
    "HttpTransport",
    "HttpxTransport",
]
