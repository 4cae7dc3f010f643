"""
SnapKit Errors

Flat error taxonomy raised by the image loader:
- InvalidURLError: the string could not be parsed as an http(s) URL
- DownloadFailedError: transport failure or non-2xx status
- InvalidImageDataError: body fetched but not decodable
- LoadCancelledError: result discarded after the caller cancelled
"""

from typing import Optional


class SnapKitError(Exception):
    """Base class for all image loading errors."""


class InvalidURLError(SnapKitError):
    """The supplied string does not parse as an image URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")


class InvalidHTTPResponse(Exception):
    """Synthesized cause for a response outside the 2xx range."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Invalid HTTP response (status {status_code})")


class DownloadFailedError(SnapKitError):
    """The fetch failed at the transport level or returned a bad status."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Download failed: {cause}")

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.cause, "status_code", None)


class InvalidImageDataError(SnapKitError):
    """The response body could not be decoded as an image."""

    def __init__(self, reason: str = "Invalid image data"):
        self.reason = reason
        super().__init__(reason)


class LoadCancelledError(SnapKitError):
    """The load was cancelled; its result was discarded."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Load cancelled: {url}")
