"""
Image Memory Cache

Thread-safe in-memory cache for decoded images, keyed by URL string.

Features:
- Thread-safe operations with Lock
- Dual limit: item count and total cost (0 = unlimited)
- LRU eviction: store() and retrieve() hits mark an entry most recently used,
  victims are taken from the least recently used end until both limits hold
- Full clear on memory-pressure signal
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from threading import Lock
from typing import Any, Dict, Optional

from ..image import DecodedImage
from .memory_pressure import MemoryPressureNotifier

logger = logging.getLogger(__name__)

DEFAULT_COUNT_LIMIT = 100
DEFAULT_TOTAL_COST_LIMIT = 50 * 1024 * 1024


@dataclass
class CacheEntry:
    """
    Cache entry data structure
    """
    key: str                # Canonical URL string
    image: DecodedImage     # Decoded bitmap
    cost: int               # width * height * scale^2


class ImageCache:
    """
    Bounded in-memory image cache

    Features:
    - Maximum entry count and total cost with LRU eviction
    - Thread-safe with Lock
    - Optional subscription to memory-pressure signals
    """

    def __init__(
        self,
        count_limit: int = DEFAULT_COUNT_LIMIT,
        total_cost_limit: int = DEFAULT_TOTAL_COST_LIMIT,
        memory_pressure: Optional[MemoryPressureNotifier] = None,
    ):
        """
        Initialize image cache

        Args:
            count_limit: Maximum number of images to keep (0 = unlimited)
            total_cost_limit: Maximum summed cost of all images (0 = unlimited)
            memory_pressure: Notifier whose signals clear this cache
        """
        if count_limit < 0 or total_cost_limit < 0:
            raise ValueError("cache limits must be >= 0")

        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = Lock()
        self._count_limit = count_limit
        self._total_cost_limit = total_cost_limit
        self._total_cost = 0

        self._memory_pressure = memory_pressure
        if memory_pressure is not None:
            memory_pressure.subscribe(self.clear)

    @property
    def count_limit(self) -> int:
        return self._count_limit

    @property
    def total_cost_limit(self) -> int:
        return self._total_cost_limit

    def store(self, image: DecodedImage, key: str) -> None:
        """
        Store image under key, replacing any previous entry.

        May evict least recently used entries to respect the limits. An
        image whose own cost exceeds the total cost limit is not cached.

        Args:
            image: Decoded image
            key: Cache key (canonical URL string)
        """
        cost = image.cost

        with self._lock:
            self._pop_entry(key)

            if self._total_cost_limit and cost > self._total_cost_limit:
                logger.warning(
                    f"[ImageCache] Image too large to cache (cost {cost}): {key[:60]}"
                )
                return

            self._entries[key] = CacheEntry(key=key, image=image, cost=cost)
            self._total_cost += cost
            self._evict()

        logger.debug(f"[ImageCache] Stored: {key[:60]} (cost {cost})")

    def retrieve(self, key: str) -> Optional[DecodedImage]:
        """
        Get cached image by key

        Returns:
            DecodedImage if cached, None otherwise
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            self._entries.move_to_end(key)
            return entry.image

    def remove(self, key: str) -> None:
        """Remove the entry for key, if any."""
        with self._lock:
            self._pop_entry(key)

    def clear(self) -> int:
        """
        Clear all cached images

        Returns:
            Number of entries removed
        """
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._total_cost = 0

        logger.info(f"[ImageCache] Cleared all {count} entries")
        return count

    def cost_for(self, key: str) -> Optional[int]:
        """Recorded cost for key, or None if not cached. Does not touch recency."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.cost if entry else None

    @property
    def total_cost(self) -> int:
        with self._lock:
            return self._total_cost

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics
        """
        with self._lock:
            total_cost = self._total_cost
            return {
                "total_entries": len(self._entries),
                "count_limit": self._count_limit,
                "total_cost": total_cost,
                "total_cost_limit": self._total_cost_limit,
                "usage_percent": (
                    round(total_cost / self._total_cost_limit * 100, 1)
                    if self._total_cost_limit > 0 else 0
                ),
            }

    def close(self) -> None:
        """Stop listening for memory-pressure signals."""
        if self._memory_pressure is not None:
            self._memory_pressure.unsubscribe(self.clear)
            self._memory_pressure = None

    def __enter__(self) -> "ImageCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _pop_entry(self, key: str) -> Optional[CacheEntry]:
        """Remove one entry and its cost (internal, assumes lock held)"""
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._total_cost -= entry.cost
        return entry

    def _evict(self) -> None:
        """Drop LRU entries until both limits hold (internal, assumes lock held)"""
        while self._entries and (
            (self._count_limit and len(self._entries) > self._count_limit)
            or (self._total_cost_limit and self._total_cost > self._total_cost_limit)
        ):
            key, entry = self._entries.popitem(last=False)
            self._total_cost -= entry.cost
            logger.debug(f"[ImageCache] LRU evicted: {key[:60]}")
