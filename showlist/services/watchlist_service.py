"""
Watchlist Service
=================

Watchlist and watchlist-item CRUD with cache-aside reads and
commit-then-invalidate writes.

CACHED READS
------------
    user_watchlists_{user}     every watchlist the user owns, with its items
    watchlist_{id}             one watchlist with its items
    watchlist_items_{id}       items of one watchlist, each enriched with
                               `media_details` (MediaItem summary or null)

Ownership is always checked against the database before a cached entry is
served, so a cached list can never leak to another user.

WRITES
------
Every mutation commits first and then deletes the affected keys (see
`showlist.caching.invalidation`) before returning. A reader that misses
after the response went out is guaranteed to rebuild from committed rows.
"""

import asyncio
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from showlist.caching.accessor import CacheAccessor
from showlist.caching.invalidation import CacheInvalidator, Mutation
from showlist.caching.keys import user_watchlists_key, watchlist_items_key, watchlist_key
from showlist.core.config.settings import Settings
from showlist.core.exceptions import (
    DuplicateItemError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from showlist.core.logging import get_logger, log_stage
from showlist.infrastructure.database.models import MediaType, Watchlist, WatchStatus
from showlist.infrastructure.database.repositories import (
    WatchlistItemRepository,
    WatchlistRepository,
)
from showlist.services.catalog_service import CatalogService
from showlist.services.serializers import serialize_item, serialize_watchlist

logger = get_logger(__name__)

# Sentinel for "field not supplied" in partial updates
UNSET: Any = object()


class WatchlistService:
    """
    Usage:
        service = WatchlistService(session, accessor, catalog, settings)

        watchlists = await service.list_watchlists(user_id)
        created = await service.create_watchlist(user_id, "Weekend")
        item = await service.add_item(user_id, created["id"], 438631, MediaType.MOVIE)
    """

    def __init__(
        self,
        session: AsyncSession,
        accessor: CacheAccessor,
        catalog: CatalogService,
        settings: Settings,
    ):
        self._session = session
        self._accessor = accessor
        self._invalidator = CacheInvalidator(accessor)
        self._catalog = catalog
        self._ttl = settings.cache.CACHE_DEFAULT_TTL
        self._watchlists = WatchlistRepository(session)
        self._items = WatchlistItemRepository(session)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _owned_watchlist(self, user_id: str, watchlist_id: str) -> Watchlist:
        watchlist = await self._watchlists.get_by_id(watchlist_id)
        if watchlist is None:
            raise NotFoundError("Watchlist not found", details={"watchlist_id": watchlist_id})
        if watchlist.owner_id != user_id:
            log_stage(logger, "5.1", "Watchlist access denied", level="warning",
                      watchlist_id=watchlist_id, user_id=user_id)
            raise PermissionDeniedError("Unauthorized")
        return watchlist

    @staticmethod
    def _clean_name(name: str | None) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationFailedError("Watchlist name is required")
        return cleaned

    async def _commit_and_invalidate(
        self, mutation: Mutation, owner_id: str, watchlist_id: str | None = None
    ) -> None:
        await self._session.commit()
        await self._invalidator.invalidate(mutation, owner_id, watchlist_id)

    # -------------------------------------------------------------------------
    # Watchlists
    # -------------------------------------------------------------------------

    async def list_watchlists(self, user_id: str) -> list[dict[str, Any]]:
        """All of the user's watchlists, newest first, each with its items."""

        async def produce() -> list[dict[str, Any]]:
            watchlists = await self._watchlists.list_for_owner(user_id)
            items = await self._items.list_for_watchlists([wl.id for wl in watchlists])
            by_watchlist: dict[str, list] = {wl.id: [] for wl in watchlists}
            for item in items:
                by_watchlist[item.watchlist_id].append(item)
            return [serialize_watchlist(wl, by_watchlist[wl.id]) for wl in watchlists]

        return await self._accessor.get_or_fetch(user_watchlists_key(user_id), produce, self._ttl)

    async def get_watchlist(self, user_id: str, watchlist_id: str) -> dict[str, Any]:
        """One watchlist with its items."""
        watchlist = await self._owned_watchlist(user_id, watchlist_id)

        async def produce() -> dict[str, Any]:
            items = await self._items.list_for_watchlist(watchlist.id)
            return serialize_watchlist(watchlist, items)

        return await self._accessor.get_or_fetch(watchlist_key(watchlist.id), produce, self._ttl)

    async def create_watchlist(self, user_id: str, name: str) -> dict[str, Any]:
        watchlist = await self._watchlists.create(user_id, self._clean_name(name))
        data = serialize_watchlist(watchlist)
        await self._commit_and_invalidate(Mutation.WATCHLIST_CREATED, user_id)

        log_stage(logger, "5.2", "Watchlist created", watchlist_id=watchlist.id, user_id=user_id)
        return data

    async def update_watchlist(self, user_id: str, watchlist_id: str, name: str) -> dict[str, Any]:
        watchlist = await self._owned_watchlist(user_id, watchlist_id)
        watchlist = await self._watchlists.rename(watchlist, self._clean_name(name))
        data = serialize_watchlist(watchlist)
        await self._commit_and_invalidate(Mutation.WATCHLIST_UPDATED, user_id, watchlist_id)
        return data

    async def delete_watchlist(self, user_id: str, watchlist_id: str) -> None:
        """Delete a watchlist and its items (items first)."""
        watchlist = await self._owned_watchlist(user_id, watchlist_id)
        removed = await self._items.delete_for_watchlists([watchlist.id])
        await self._watchlists.delete(watchlist)
        await self._commit_and_invalidate(Mutation.WATCHLIST_DELETED, user_id, watchlist_id)

        log_stage(logger, "5.3", "Watchlist deleted", watchlist_id=watchlist_id, items_removed=removed)

    # -------------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------------

    async def get_items(self, user_id: str, watchlist_id: str) -> list[dict[str, Any]]:
        """
        Items of one watchlist, newest first, each with `media_details`.

        Titles TMDB cannot describe right now get `media_details: null`
        rather than failing the whole list.
        """
        watchlist = await self._owned_watchlist(user_id, watchlist_id)

        async def produce() -> list[dict[str, Any]]:
            items = await self._items.list_for_watchlist(watchlist.id)
            details = await asyncio.gather(
                *(self._catalog.media_item(item.media_type.value, item.tmdb_id) for item in items)
            )
            return [
                {**serialize_item(item), "media_details": media}
                for item, media in zip(items, details)
            ]

        return await self._accessor.get_or_fetch(watchlist_items_key(watchlist.id), produce, self._ttl)

    async def add_item(
        self,
        user_id: str,
        watchlist_id: str,
        tmdb_id: int,
        media_type: MediaType,
        status: WatchStatus | None = None,
        scheduled_at: datetime | None = None,
    ) -> dict[str, Any]:
        """
        Raises:
            DuplicateItemError: The title is already in a watchlist
        """
        await self._owned_watchlist(user_id, watchlist_id)

        if await self._items.find_by_tmdb_id(tmdb_id) is not None:
            raise DuplicateItemError(
                "This item already exists in a watchlist", details={"tmdb_id": tmdb_id}
            )

        item = await self._items.create(
            watchlist_id=watchlist_id,
            tmdb_id=tmdb_id,
            media_type=media_type,
            status=status or WatchStatus.PLANNED,
            scheduled_at=scheduled_at,
        )
        data = serialize_item(item)
        await self._commit_and_invalidate(Mutation.ITEM_ADDED, user_id, watchlist_id)
        return data

    async def update_item(
        self,
        user_id: str,
        watchlist_id: str,
        item_id: str,
        status: WatchStatus | None = None,
        scheduled_at: datetime | None = UNSET,
    ) -> dict[str, Any]:
        """
        Partial update. `scheduled_at=None` clears the schedule; leaving it
        unset keeps it.
        """
        await self._owned_watchlist(user_id, watchlist_id)

        item = await self._items.get_in_watchlist(item_id, watchlist_id)
        if item is None:
            raise NotFoundError("Item not found in this watchlist", details={"item_id": item_id})

        fields: dict[str, Any] = {}
        if status is not None:
            fields["status"] = status
        if scheduled_at is not UNSET:
            fields["scheduled_at"] = scheduled_at
        if not fields:
            raise ValidationFailedError("No valid fields to update")

        item = await self._items.update(item, **fields)
        data = serialize_item(item)
        await self._commit_and_invalidate(Mutation.ITEM_UPDATED, user_id, watchlist_id)
        return data

    async def delete_item(self, user_id: str, watchlist_id: str, item_id: str) -> None:
        await self._owned_watchlist(user_id, watchlist_id)

        item = await self._items.get_in_watchlist(item_id, watchlist_id)
        if item is None:
            raise NotFoundError("Item not found in this watchlist", details={"item_id": item_id})

        await self._items.delete(item)
        await self._commit_and_invalidate(Mutation.ITEM_DELETED, user_id, watchlist_id)
