"""
Cancellation Token

Cooperative cancellation for a single load. The loader checks the token
once, after the download (fetch, decode and cache write) has finished or
failed, and discards the result if it was cancelled by then.
"""


class CancellationToken:
    """One-shot cancellation flag shared between a caller and a load."""

    def __init__(self):
        self._cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
