"""
Row → JSON-ready dict conversion.

Everything a service caches or returns goes through here, so cached and
freshly loaded responses have the same shape (ISO-8601 timestamps, enum
values as plain strings).
"""

from datetime import datetime
from typing import Any

from showlist.infrastructure.database.models import User, Watchlist, WatchlistItem


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def serialize_item(item: WatchlistItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "watchlist_id": item.watchlist_id,
        "tmdb_id": item.tmdb_id,
        "media_type": item.media_type.value,
        "status": item.status.value,
        "scheduled_at": isoformat(item.scheduled_at),
        "created_at": isoformat(item.created_at),
        "updated_at": isoformat(item.updated_at),
    }


def serialize_watchlist(watchlist: Watchlist, items: list[WatchlistItem] | None = None) -> dict[str, Any]:
    """Watchlist columns, plus its items when `items` is given."""
    data = {
        "id": watchlist.id,
        "name": watchlist.name,
        "owner_id": watchlist.owner_id,
        "created_at": isoformat(watchlist.created_at),
        "updated_at": isoformat(watchlist.updated_at),
    }
    if items is not None:
        data["items"] = [serialize_item(item) for item in items]
    return data


def serialize_profile(user: User) -> dict[str, Any]:
    """Public profile; never includes the password hash."""
    return {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "bio": user.bio,
        "country": user.country,
        "watch_time": user.watch_time,
        "movies_watched": user.movies_watched,
        "shows_watched": user.shows_watched,
        "created_at": isoformat(user.created_at),
    }


def serialize_user_summary(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "on_boarded": user.on_boarded,
    }
