"""
Loader Factory

Explicit wiring of cache, transport and decoder from a SnapKitConfig.
There are no module-level singletons: construct one loader at startup and
pass it to every consumer.
"""

import logging
from typing import Optional

from .cache.memory_pressure import MemoryPressureNotifier
from .cache.memory_store import ImageCache
from .config import SnapKitConfig
from .image_loader.decoder import PillowDecoder
from .image_loader.loader import ImageLoader
from .image_loader.transport import HttpTransport, HttpxTransport

logger = logging.getLogger(__name__)


def create_image_loader(
    config: Optional[SnapKitConfig] = None,
    memory_pressure: Optional[MemoryPressureNotifier] = None,
    transport: Optional[HttpTransport] = None,
) -> ImageLoader:
    """
    Build an ImageLoader with its own cache.

    Args:
        config: Settings (defaults to SnapKitConfig())
        memory_pressure: Notifier that clears the cache on low memory
        transport: Fetch capability (defaults to HttpxTransport)

    Returns:
        Configured ImageLoader; its cache is available as loader.cache
    """
    config = config or SnapKitConfig()

    cache = ImageCache(
        count_limit=config.cache_count_limit,
        total_cost_limit=config.cache_total_cost_limit,
        memory_pressure=memory_pressure,
    )
    loader = ImageLoader(
        cache=cache,
        transport=transport or HttpxTransport(config),
        decoder=PillowDecoder(scale=config.image_scale),
        deduplicate_requests=config.deduplicate_requests,
    )

    logger.info(
        f"[SnapKit] Loader ready (count_limit={config.cache_count_limit}, "
        f"cost_limit={config.cache_total_cost_limit}, dedup={config.deduplicate_requests})"
    )
    return loader
