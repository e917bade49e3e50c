"""
Core Interfaces Module

Protocols for pluggable infrastructure.

Components:
-----------
- **cache.py**: CacheStore protocol for cache store implementations
"""

from showlist.core.interfaces.cache import CacheStore

__all__ = ["CacheStore"]
