"""
Exception Module

Structured exception hierarchy for the Showlist API, organized by theme.

Module Structure:
-----------------
- **base.py**: ShowlistError base class + ConfigurationError
- **cache.py**: cache store exceptions (swallowed by the cache-aside accessor)
- **upstream.py**: catalog provider exceptions raised by services
- **domain.py**: validation, auth, ownership and existence exceptions

Usage:
------
```python
from showlist.core.exceptions import NotFoundError, UpstreamUnavailableError
```
"""

from showlist.core.exceptions.base import ConfigurationError, ShowlistError
from showlist.core.exceptions.cache import CacheConnectionError, CacheError, CacheKeyError
from showlist.core.exceptions.domain import (
    AuthenticationError,
    ConflictError,
    DuplicateItemError,
    NotFoundError,
    PermissionDeniedError,
    TokenError,
    ValidationFailedError,
)
from showlist.core.exceptions.upstream import UpstreamError, UpstreamUnavailableError

__all__ = [
    "AuthenticationError",
    "CacheConnectionError",
    "CacheError",
    "CacheKeyError",
    "ConfigurationError",
    "ConflictError",
    "DuplicateItemError",
    "NotFoundError",
    "PermissionDeniedError",
    "ShowlistError",
    "TokenError",
    "UpstreamError",
    "UpstreamUnavailableError",
    "ValidationFailedError",
]
