"""
Cache-aside layer: envelopes, the accessor, key derivation and invalidation.
"""

from showlist.caching.accessor import MISS, CacheAccessor, CacheLookup
from showlist.caching.envelope import CacheEnvelope, is_fresh, wrap
from showlist.caching.invalidation import CacheInvalidator, Mutation
from showlist.caching.keys import key_for

__all__ = [
    "MISS",
    "CacheAccessor",
    "CacheEnvelope",
    "CacheInvalidator",
    "CacheLookup",
    "Mutation",
    "is_fresh",
    "key_for",
    "wrap",
]
