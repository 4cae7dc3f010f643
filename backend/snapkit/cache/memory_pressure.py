"""
Memory Pressure Notifications

Observer registry for low-memory signals. The host application calls
post() when it detects memory pressure; subscribed caches clear themselves.

Bound-method subscribers are held by weak reference so a discarded cache
never stays alive just because it is registered here.
"""

import logging
import weakref
from threading import RLock
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)

_Ref = Callable[[], Optional[Callable[[], object]]]


class MemoryPressureNotifier:
    """
    Delivers memory-pressure signals to subscribers.

    Usage:
        notifier = MemoryPressureNotifier()
        notifier.subscribe(cache.clear)
        notifier.post()
    """

    def __init__(self):
        self._subscribers: List[_Ref] = []
        self._lock = RLock()

    def subscribe(self, callback: Callable[[], object]) -> None:
        """Register a callback. Bound methods are held weakly, functions strongly."""
        if not callable(callback):
            raise TypeError("callback must be callable")

        if hasattr(callback, "__self__"):
            ref: _Ref = weakref.WeakMethod(callback, self._discard)
        else:
            # Plain functions and lambdas are often temporaries; keep them alive
            ref = lambda cb=callback: cb  # noqa: E731

        with self._lock:
            self._subscribers.append(ref)
        logger.debug(f"[MemoryPressure] Subscribed: {callback!r}")

    def unsubscribe(self, callback: Callable[[], object]) -> None:
        """Remove a callback (and any dead references). No-op if absent."""
        with self._lock:
            self._subscribers = [
                ref for ref in self._subscribers
                if ref() is not None and ref() != callback
            ]

    def post(self) -> int:
        """
        Signal memory pressure to every live subscriber.

        Returns:
            Number of subscribers notified.
        """
        with self._lock:
            callbacks = [ref() for ref in self._subscribers]

        notified = 0
        for callback in callbacks:
            if callback is None:
                continue
            try:
                callback()
                notified += 1
            except Exception as e:
                logger.error(f"[MemoryPressure] Subscriber {callback!r} failed: {e}")

        logger.info(f"[MemoryPressure] Signal delivered to {notified} subscribers")
        return notified

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return sum(1 for ref in self._subscribers if ref() is not None)

    def _discard(self, ref: _Ref) -> None:
        with self._lock:
            if ref in self._subscribers:
                self._subscribers.remove(ref)
