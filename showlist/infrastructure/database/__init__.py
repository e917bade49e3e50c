from showlist.infrastructure.database.models import (
    Base,
    MediaType,
    User,
    Watchlist,
    WatchlistItem,
    WatchStatus,
)
from showlist.infrastructure.database.repositories import (
    UserRepository,
    WatchlistItemRepository,
    WatchlistRepository,
)
from showlist.infrastructure.database.session import Database

__all__ = [
    "Base",
    "Database",
    "MediaType",
    "User",
    "UserRepository",
    "WatchStatus",
    "Watchlist",
    "WatchlistItem",
    "WatchlistItemRepository",
    "WatchlistRepository",
]
