"""
Repositories - keyed CRUD over users, watchlists and watchlist items.

Repositories flush but never commit; the service owning the unit of work
commits, then invalidates the cache.
"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from showlist.infrastructure.database.models import (
    MediaType,
    User,
    Watchlist,
    WatchlistItem,
    WatchStatus,
)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Case-insensitive email lookup."""
        if not email or not email.strip():
            return None
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def create(self, email: str, password_hash: str, first_name: str, last_name: str) -> User:
        user = User(
            email=email.strip().lower(),
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, **fields) -> User:
        for name, value in fields.items():
            setattr(user, name, value)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        await self.db.delete(user)
        await self.db.flush()


class WatchlistRepository:
    """Repository for Watchlist database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, watchlist_id: str) -> Watchlist | None:
        result = await self.db.execute(select(Watchlist).where(Watchlist.id == watchlist_id))
        return result.scalar_one_or_none()

    async def list_for_owner(self, owner_id: str) -> list[Watchlist]:
        """Newest first."""
        result = await self.db.execute(
            select(Watchlist)
            .where(Watchlist.owner_id == owner_id)
            .order_by(Watchlist.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_ids_for_owner(self, owner_id: str) -> list[str]:
        result = await self.db.execute(select(Watchlist.id).where(Watchlist.owner_id == owner_id))
        return list(result.scalars().all())

    async def create(self, owner_id: str, name: str) -> Watchlist:
        watchlist = Watchlist(owner_id=owner_id, name=name)
        self.db.add(watchlist)
        await self.db.flush()
        await self.db.refresh(watchlist)
        return watchlist

    async def rename(self, watchlist: Watchlist, name: str) -> Watchlist:
        watchlist.name = name
        await self.db.flush()
        await self.db.refresh(watchlist)
        return watchlist

    async def delete(self, watchlist: Watchlist) -> None:
        await self.db.delete(watchlist)
        await self.db.flush()

    async def delete_for_owner(self, owner_id: str) -> int:
        result = await self.db.execute(delete(Watchlist).where(Watchlist.owner_id == owner_id))
        return result.rowcount or 0


class WatchlistItemRepository:
    """Repository for WatchlistItem database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_in_watchlist(self, item_id: str, watchlist_id: str) -> WatchlistItem | None:
        result = await self.db.execute(
            select(WatchlistItem).where(
                WatchlistItem.id == item_id,
                WatchlistItem.watchlist_id == watchlist_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_watchlist(self, watchlist_id: str) -> list[WatchlistItem]:
        """Newest first."""
        result = await self.db.execute(
            select(WatchlistItem)
            .where(WatchlistItem.watchlist_id == watchlist_id)
            .order_by(WatchlistItem.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_for_watchlists(self, watchlist_ids: Sequence[str]) -> list[WatchlistItem]:
        if not watchlist_ids:
            return []
        result = await self.db.execute(
            select(WatchlistItem)
            .where(WatchlistItem.watchlist_id.in_(watchlist_ids))
            .order_by(WatchlistItem.created_at.desc())
        )
        return list(result.scalars().all())

    async def find_by_tmdb_id(self, tmdb_id: int) -> WatchlistItem | None:
        """First item referencing `tmdb_id` in any watchlist."""
        result = await self.db.execute(
            select(WatchlistItem).where(WatchlistItem.tmdb_id == tmdb_id).limit(1)
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        watchlist_id: str,
        tmdb_id: int,
        media_type: MediaType,
        status: WatchStatus = WatchStatus.PLANNED,
        scheduled_at: datetime | None = None,
    ) -> WatchlistItem:
        item = WatchlistItem(
            watchlist_id=watchlist_id,
            tmdb_id=tmdb_id,
            media_type=media_type,
            status=status,
            scheduled_at=scheduled_at,
        )
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def update(self, item: WatchlistItem, **fields) -> WatchlistItem:
        for name, value in fields.items():
            setattr(item, name, value)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def delete(self, item: WatchlistItem) -> None:
        await self.db.delete(item)
        await self.db.flush()

    async def delete_for_watchlists(self, watchlist_ids: Sequence[str]) -> int:
        if not watchlist_ids:
            return 0
        result = await self.db.execute(
            delete(WatchlistItem).where(WatchlistItem.watchlist_id.in_(watchlist_ids))
        )
        return result.rowcount or 0
