"""
SnapKit test configuration

Shared pytest fixtures and helpers:
- PNG bytes generated with Pillow
- DecodedImage factory with explicit dimensions and scale
- FakeTransport: records fetches, serves canned responses, can block on a gate
"""

import asyncio
import sys
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
from PIL import Image

# Make the backend directory importable without installing
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from snapkit.cache import ImageCache, MemoryPressureNotifier
from snapkit.image import DecodedImage
from snapkit.image_loader import FetchResponse, ImageLoader


IMAGE_URL = "https://example.com/images/photo.png"
OTHER_IMAGE_URL = "https://example.com/images/other.png"


# ============================================
# Helper Functions
# ============================================

def make_png(width: int = 10, height: int = 10, color=(255, 0, 0)) -> bytes:
    """Encode a solid-color RGB image as PNG bytes."""
    output = BytesIO()
    Image.new("RGB", (width, height), color).save(output, format="PNG")
    return output.getvalue()


def make_image(width: int = 10, height: int = 10, scale: float = 1.0) -> DecodedImage:
    """Build a DecodedImage without going through the decoder."""
    return DecodedImage(image=Image.new("RGB", (width, height)), scale=scale)


async def wait_for_calls(transport: "FakeTransport", count: int) -> None:
    """Yield to the event loop until the transport has seen `count` fetches."""
    for _ in range(100):
        if len(transport.calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} fetches, saw {len(transport.calls)}")


class FakeTransport:
    """
    In-memory HttpTransport.

    Unknown URLs answer 404. When `gate` is set to an asyncio.Event, every
    fetch blocks until the event is set.
    """

    def __init__(self):
        self.responses: Dict[str, Union[FetchResponse, BaseException]] = {}
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.cancel_all_calls = 0
        self.closed = False

    def respond(self, url: str, content: bytes, status_code: int = 200) -> None:
        self.responses[url] = FetchResponse(content=content, status_code=status_code)

    def fail(self, url: str, error: BaseException) -> None:
        self.responses[url] = error

    async def fetch(self, url) -> FetchResponse:
        self.calls.append(str(url))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)

        result = self.responses.get(str(url))
        if result is None:
            return FetchResponse(content=b"", status_code=404)
        if isinstance(result, BaseException):
            raise result
        return result

    def cancel_all(self) -> int:
        self.cancel_all_calls += 1
        return 0

    async def aclose(self) -> None:
        self.closed = True


# ============================================
# Fixtures
# ============================================

@pytest.fixture
def png_bytes() -> bytes:
    return make_png(10, 10)


@pytest.fixture
def cache() -> ImageCache:
    return ImageCache()


@pytest.fixture
def notifier() -> MemoryPressureNotifier:
    return MemoryPressureNotifier()


@pytest.fixture
def transport(png_bytes) -> FakeTransport:
    fake = FakeTransport()
    fake.respond(IMAGE_URL, png_bytes)
    fake.respond(OTHER_IMAGE_URL, make_png(20, 20, color=(0, 0, 255)))
    return fake


@pytest.fixture
def loader(cache, transport) -> ImageLoader:
    return ImageLoader(cache=cache, transport=transport)
