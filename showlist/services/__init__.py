"""
Application Services Package
============================

Business logic used by the API routes:

- CatalogService: TMDB-backed catalog responses, served cache-aside
- WatchlistService: watchlist and item CRUD, commit-then-invalidate
- UserService: registration, login, onboarding and profiles

Controller (routes) → Service → Repository / TMDB client / CacheAccessor
"""

from showlist.services.catalog_service import CatalogService
from showlist.services.user_service import UserService
from showlist.services.watchlist_service import WatchlistService

__all__ = ["CatalogService", "UserService", "WatchlistService"]
