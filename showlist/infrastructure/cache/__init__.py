"""
Cache store implementations and the factory that picks one from settings.
"""

import time

from showlist.caching.envelope import Clock
from showlist.core.config.settings import Settings
from showlist.core.interfaces.cache import CacheStore
from showlist.infrastructure.cache.memory_store import MemoryCacheStore
from showlist.infrastructure.cache.redis_client import RedisClient


def build_cache_store(settings: Settings, clock: Clock = time.time) -> CacheStore:
    """Construct (but do not connect) the store named by CACHE_BACKEND."""
    if settings.cache.CACHE_BACKEND == "memory":
        return MemoryCacheStore(max_size=settings.cache.CACHE_MEMORY_MAX_SIZE, clock=clock)
    return RedisClient(settings)


__all__ = ["MemoryCacheStore", "RedisClient", "build_cache_store"]
