"""
Cache-Related Exceptions

Raised by cache store adapters only. The cache-aside accessor catches every
`CacheError` and degrades it to a miss or a no-op, so these never reach an
API client.
"""

from showlist.core.exceptions.base import ShowlistError


class CacheError(ShowlistError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when the cache store is unreachable or not connected.

    Common causes:
    - Redis server is down
    - Client used before `connect()`
    - Incorrect host/port configuration
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a single cache command fails.

    Common causes:
    - Operation timeout
    - Memory limit exceeded on the server
    """
    pass
