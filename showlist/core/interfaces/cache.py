"""
Cache Store Protocol

Abstract protocol for the key-value store behind the cache-aside accessor.

Architectural Decision: Protocol-based abstraction
- Redis in production, an in-process LRU in development and tests
- The accessor receives a store handle explicitly; nothing reaches for a
  module-level "current store"
- Runtime validation with @runtime_checkable
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """
    Protocol for string-keyed stores with per-key physical expiry.

    Implementations:
    - RedisClient: pooled redis.asyncio client
    - MemoryCacheStore: in-process LRU with expiry

    Contract:
    - `get` returns None for an absent (or physically expired) key
    - `set` overwrites unconditionally; `ttl` is the physical expiry
    - `delete` of an absent key is not an error
    - Backend failures raise `CacheError` subclasses; callers decide whether
      to swallow them
    """

    async def connect(self) -> None:
        """
        Establish connection to the store.

        Raises:
            CacheConnectionError: If connection fails
        """
        ...

    async def disconnect(self) -> None:
        """Close connection to the store."""
        ...

    async def ping(self) -> bool:
        """Return True if the store answers."""
        ...

    async def get(self, key: str) -> str | None:
        """
        Get raw value.

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """
        Store raw value with optional physical expiry in seconds.

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def delete(self, *keys: str) -> int:
        """
        Delete keys; returns how many existed.

        Raises:
            CacheKeyError: If operation fails
        """
        ...

    async def health_check(self) -> dict[str, Any]:
        """Health status and store-specific metrics."""
        ...
