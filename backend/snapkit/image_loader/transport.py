"""
HTTP Transport

Fetch capability used by the image loader: GET a URL, return the body and
status code. Status validation is left to the loader.

HttpxTransport runs every GET as a tracked task so cancel_all() can
interrupt in-flight downloads, the way a URL session cancels its tasks.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Set, runtime_checkable

import httpx

from ..config import SnapKitConfig
from ..errors import DownloadFailedError

logger = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Raw result of a GET."""
    content: bytes
    status_code: int
    content_type: str = ""


@runtime_checkable
class HttpTransport(Protocol):
    """Capability consumed by ImageLoader."""

    async def fetch(self, url: httpx.URL) -> FetchResponse:
        ...

    def cancel_all(self) -> int:
        ...

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    """
    httpx-backed transport.

    Usage:
        transport = HttpxTransport(config)
        response = await transport.fetch(httpx.URL("https://example.com/a.png"))
        await transport.aclose()
    """

    def __init__(
        self,
        config: Optional[SnapKitConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or SnapKitConfig()
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            timeout=self.config.request_timeout,
            follow_redirects=self.config.follow_redirects,
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "image/*,*/*;q=0.8",
            },
        )
        self._tasks: Set[asyncio.Task] = set()
        self._cancelled: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def fetch(self, url: httpx.URL) -> FetchResponse:
        """
        GET url and return body plus status code.

        Raises:
            DownloadFailedError: transport failure (timeout, DNS, TLS,
                connection reset) or cancellation through cancel_all().
        """
        task = asyncio.ensure_future(self.http_client.get(url))
        self._tasks.add(task)

        try:
            response = await task
        except asyncio.CancelledError as e:
            if task in self._cancelled:
                logger.info(f"[HttpxTransport] Cancelled: {str(url)[:60]}...")
                raise DownloadFailedError(e) from e
            raise
        except httpx.TimeoutException as e:
            logger.error(f"[HttpxTransport] Timeout: {str(url)[:60]}...")
            raise DownloadFailedError(e) from e
        except httpx.HTTPError as e:
            logger.error(f"[HttpxTransport] Fetch error: {str(url)[:60]}... - {e}")
            raise DownloadFailedError(e) from e
        finally:
            self._tasks.discard(task)
            self._cancelled.discard(task)

        content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        return FetchResponse(
            content=response.content,
            status_code=response.status_code,
            content_type=content_type,
        )

    def cancel_all(self) -> int:
        """
        Request cancellation of every in-flight GET.

        Returns:
            Number of requests signalled.
        """
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            self._cancelled.add(task)
            task.cancel()

        if pending:
            logger.info(f"[HttpxTransport] Cancelling {len(pending)} in-flight requests")
        return len(pending)

    async def aclose(self) -> None:
        """Close HTTP client."""
        if self._owns_client:
            await self.http_client.aclose()
