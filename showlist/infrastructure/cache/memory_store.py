"""
In-Memory Cache Store

Per-process LRU store with per-key physical expiry. Implements the same
CacheStore protocol as RedisClient so development and tests can run with
no Redis at all.

Implementation Details:
- OrderedDict for O(1) access and LRU ordering
- asyncio.Lock around every mutation
- Expired entries are dropped lazily on access
- Shares the accessor's clock so simulated time moves both
"""

import asyncio
import time
from collections import OrderedDict
from typing import Any

from showlist.caching.envelope import Clock
from showlist.core.logging import get_logger

logger = get_logger(__name__)


class MemoryCacheStore:
    """
    LRU key-value store with expiry.

    Usage:
        store = MemoryCacheStore(max_size=1000)
        await store.set("k", "v", ttl=60)
        await store.get("k")  # "v" for the next 60 seconds
    """

    def __init__(self, max_size: int = 5000, clock: Clock = time.time):
        self._max_size = max_size
        self._clock = clock
        # key -> (value, expires_at or None)
        self._data: OrderedDict[str, tuple[str, float | None]] = OrderedDict()
        self._lock = asyncio.Lock()
        self._connected = False

    async def connect(self) -> None:
        self._connected = True
        logger.info("In-memory cache store ready", stage="MEMSTORE.1", max_size=self._max_size)

    async def disconnect(self) -> None:
        async with self._lock:
            self._data.clear()
        self._connected = False

    async def ping(self) -> bool:
        return self._connected

    def _expired(self, expires_at: float | None) -> bool:
        return expires_at is not None and self._clock() >= expires_at

    async def get(self, key: str) -> str | None:
        async with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if self._expired(expires_at):
                del self._data[key]
                return None

            self._data.move_to_end(key)
            return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        expires_at = self._clock() + ttl if ttl else None

        async with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = (value, expires_at)

            # Evict least recently used
            while len(self._data) > self._max_size:
                self._data.popitem(last=False)
        return True

    async def delete(self, *keys: str) -> int:
        deleted = 0
        async with self._lock:
            for key in keys:
                if self._data.pop(key, None) is not None:
                    deleted += 1
        return deleted

    def contains(self, key: str) -> bool:
        """True if `key` is physically stored and not yet expired."""
        entry = self._data.get(key)
        return entry is not None and not self._expired(entry[1])

    def size(self) -> int:
        return len(self._data)

    async def health_check(self) -> dict[str, Any]:
        return {
            "status": "healthy" if self._connected else "unhealthy",
            "backend": "memory",
            "connected": self._connected,
            "size": len(self._data),
            "max_size": self._max_size,
        }
