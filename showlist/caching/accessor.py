#!/usr/bin/env python3
"""
Cache-Aside Accessor

Architecture:
    CacheAccessor (Public API)
        ├── CacheStore (injected: Redis or in-memory)
        ├── CacheEnvelope (capture timestamp + freshness check)
        └── CacheObserver (hit/miss counters & logging)

Protocol:
    read    → store.get → decode envelope → freshness check → CacheLookup
    write   → wrap with current time → encode → store.set(ttl * 2)
    delete  → store.delete (idempotent)

Failure policy:
    The cache is an optimization, never a correctness dependency. Store
    errors on read degrade to a miss; store errors on write and delete are
    logged and swallowed. Undecodable entries are misses.
"""

import inspect
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from showlist.caching.envelope import CacheEnvelope, Clock, EnvelopeDecodeError, is_fresh, wrap
from showlist.core.config.constants import CACHE_PHYSICAL_TTL_FACTOR
from showlist.core.exceptions import CacheError
from showlist.core.interfaces.cache import CacheStore
from showlist.core.logging import get_logger, log_stage

logger = get_logger(__name__)

T = TypeVar("T")


# =============================================================================
# LAYER 1: LOOKUP RESULT
# =============================================================================


@dataclass(frozen=True)
class CacheLookup:
    """
    Two-valued read result: either a fresh payload or absent.

    `found` is the only thing that distinguishes a cached `None`-like payload
    from a miss, so callers branch on it rather than on `value`.
    """

    found: bool
    value: Any = None

    @classmethod
    def hit(cls, value: Any) -> "CacheLookup":
        return cls(found=True, value=value)


MISS = CacheLookup(found=False)


# =============================================================================
# LAYER 2: OBSERVABILITY
# =============================================================================


class CacheObserver:
    """
    Tracks accessor outcomes and logs them.

    Outcomes Tracked:
    - hits, misses (absent key), stale (present but expired)
    - corrupt (undecodable entry), errors (store failures)
    - writes, write_failures, deletes, delete_failures
    """

    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger
        self._counts = {
            "hits": 0,
            "misses": 0,
            "stale": 0,
            "corrupt": 0,
            "errors": 0,
            "writes": 0,
            "write_failures": 0,
            "deletes": 0,
            "delete_failures": 0,
        }

    def record(self, outcome: str, key: str, **fields) -> None:
        self._counts[outcome] += 1

        if outcome == "hits":
            log_stage(self._logger, "2.1", "Cache hit", level="debug", cache_key=key)
        elif outcome == "misses":
            log_stage(self._logger, "2.2", "Cache miss", level="debug", cache_key=key)
        elif outcome == "stale":
            log_stage(self._logger, "2.2", "Cache entry stale", level="debug", cache_key=key, **fields)
        elif outcome == "corrupt":
            log_stage(self._logger, "2.2", "Cache entry undecodable", level="warning", cache_key=key, **fields)
        elif outcome == "errors":
            log_stage(self._logger, "2.2", "Cache read failed", level="warning", cache_key=key, **fields)
        elif outcome == "writes":
            log_stage(self._logger, "2.3", "Cache set", level="debug", cache_key=key, **fields)
        elif outcome == "write_failures":
            log_stage(self._logger, "2.3", "Cache write failed", level="error", cache_key=key, **fields)
        elif outcome == "deletes":
            log_stage(self._logger, "2.4", "Cache invalidated", level="debug", cache_key=key)
        elif outcome == "delete_failures":
            log_stage(self._logger, "2.4", "Cache delete failed", level="error", cache_key=key, **fields)

    def get_stats(self) -> dict[str, Any]:
        reads = (
            self._counts["hits"]
            + self._counts["misses"]
            + self._counts["stale"]
            + self._counts["corrupt"]
            + self._counts["errors"]
        )
        return {
            **self._counts,
            "reads": reads,
            "hit_rate": round(self._counts["hits"] / reads, 3) if reads else 0.0,
        }


# =============================================================================
# LAYER 3: PUBLIC API
# =============================================================================


class CacheAccessor:
    """
    Read-through / write-through access to a cache store.

    Usage:
        accessor = CacheAccessor(store)

        lookup = await accessor.read("home_data", ttl=600)
        if not lookup.found:
            feed = await build_feed()
            await accessor.write("home_data", feed, ttl=600)

        # or, equivalently
        feed = await accessor.get_or_fetch("home_data", build_feed, ttl=600)

    Concurrency:
        No locking. Two requests missing the same key both fetch and both
        write; the later write wins.
    """

    def __init__(self, store: CacheStore, clock: Clock = time.time, default_ttl: int = 600):
        """
        Args:
            store: Cache store handle
            clock: Returns the current unix time; replaced in tests
            default_ttl: Logical TTL used when a call passes none
        """
        self._store = store
        self._clock = clock
        self._default_ttl = default_ttl
        self._observer = CacheObserver()

    @property
    def store(self) -> CacheStore:
        return self._store

    @property
    def clock(self) -> Clock:
        return self._clock

    async def read(self, key: str, ttl: int | None = None) -> CacheLookup:
        """
        Return the payload at `key` if present and fresh.

        STAGE-2.0: Cache lookup

        Returns:
            CacheLookup.hit(payload), or MISS when the key is absent, stale,
            undecodable, or the store failed
        """
        if ttl is None:
            ttl = self._default_ttl

        try:
            raw = await self._store.get(key)
        except CacheError as e:
            self._observer.record("errors", key, error=str(e))
            return MISS

        if raw is None:
            self._observer.record("misses", key)
            return MISS

        try:
            envelope = CacheEnvelope.from_bytes(raw)
        except EnvelopeDecodeError as e:
            self._observer.record("corrupt", key, error=str(e))
            return MISS

        if not is_fresh(envelope, ttl, self._clock):
            self._observer.record("stale", key, captured_at=envelope.captured_at, ttl=ttl)
            return MISS

        self._observer.record("hits", key)
        return CacheLookup.hit(envelope.payload)

    async def write(self, key: str, payload: Any, ttl: int | None = None) -> bool:
        """
        Store `payload` under `key`, stamped with the current time.

        STAGE-2.3: Cache population

        The physical expiry is twice the logical TTL; `read` is what
        enforces freshness.

        Returns:
            True if stored, False if the write was dropped
        """
        if ttl is None:
            ttl = self._default_ttl
        if ttl <= 0:
            log_stage(logger, "2.3", "Non-positive TTL; not caching", level="debug", cache_key=key, ttl=ttl)
            return False

        try:
            encoded = wrap(payload, self._clock).to_bytes().decode("utf-8")
        except TypeError as e:
            # orjson.JSONEncodeError subclasses TypeError
            self._observer.record("write_failures", key, error=f"unserializable payload: {e}")
            return False

        try:
            await self._store.set(key, encoded, ttl=ttl * CACHE_PHYSICAL_TTL_FACTOR)
        except CacheError as e:
            self._observer.record("write_failures", key, error=str(e))
            return False

        self._observer.record("writes", key, ttl=ttl)
        return True

    async def delete(self, key: str) -> bool:
        """
        Remove `key`. Absent keys are not an error.

        STAGE-2.4: Cache invalidation

        Returns:
            True unless the store failed
        """
        try:
            await self._store.delete(key)
        except CacheError as e:
            self._observer.record("delete_failures", key, error=str(e))
            return False

        self._observer.record("deletes", key)
        return True

    async def get_or_fetch(
        self,
        key: str,
        producer: Callable[[], Awaitable[T | None] | T | None],
        ttl: int | None = None,
    ) -> T | None:
        """
        Cache-aside in one call.

        STAGE-2.5: Cache-aside pattern

        On a miss the producer runs; a None result means "unavailable" and
        is returned without being cached.
        """
        lookup = await self.read(key, ttl)
        if lookup.found:
            return lookup.value

        value = producer()
        if inspect.isawaitable(value):
            value = await value

        if value is None:
            log_stage(logger, "2.5", "Producer returned nothing; not caching", level="debug", cache_key=key)
            return None

        await self.write(key, value, ttl)
        return value

    def stats(self) -> dict[str, Any]:
        return self._observer.get_stats()

    async def health_check(self) -> dict[str, Any]:
        """
        Store health plus accessor counters.

        Returns:
            Dict with "status" ("healthy" or "degraded"), "store" and "stats"
        """
        try:
            store_health = await self._store.health_check()
        except CacheError as e:
            store_health = {"status": "unhealthy", "error": str(e)}

        return {
            "status": "healthy" if store_health.get("status") == "healthy" else "degraded",
            "store": store_health,
            "stats": self.stats(),
        }
