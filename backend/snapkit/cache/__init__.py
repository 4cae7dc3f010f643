"""
Image Cache Module

Provides the bounded in-memory store for decoded images.

Features:
- LRU eviction under item-count and total-cost limits
- Thread-safe access
- Full clear on memory-pressure signals
"""

from .memory_store import ImageCache, CacheEntry, DEFAULT_COUNT_LIMIT, DEFAULT_TOTAL_COST_LIMIT
from .memory_pressure import MemoryPressureNotifier

__all__ = [
    "ImageCache",
    "CacheEntry",
    "DEFAULT_COUNT_LIMIT",
    "DEFAULT_TOTAL_COST_LIMIT",
    "MemoryPressureNotifier",
]
