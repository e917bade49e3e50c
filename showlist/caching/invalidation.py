"""
Cache Invalidation Fanout

After a mutation commits, every key whose content could now be stale is
deleted before the response goes out.

    Mutation                          Keys deleted
    --------------------------------  ------------------------------------------
    watchlist created                 user_watchlists_{owner}
    watchlist updated / deleted       watchlist_items_{id}, watchlist_{id},
                                      user_watchlists_{owner}
    item added / updated / deleted    same three, for the parent watchlist
    user deleted                      user_profile_{user}, user_watchlists_{user},
                                      and the watchlist fanout for each owned list

Each delete is independent. They run concurrently and a failed delete does
not stop the others; the accessor already logs and swallows store errors.
"""

import asyncio
from collections.abc import Iterable
from enum import Enum

from showlist.caching.accessor import CacheAccessor
from showlist.caching.keys import (
    user_profile_key,
    user_watchlists_key,
    watchlist_items_key,
    watchlist_key,
)
from showlist.core.logging import get_logger, log_stage

logger = get_logger(__name__)


class Mutation(str, Enum):
    WATCHLIST_CREATED = "watchlist_created"
    WATCHLIST_UPDATED = "watchlist_updated"
    WATCHLIST_DELETED = "watchlist_deleted"
    ITEM_ADDED = "item_added"
    ITEM_UPDATED = "item_updated"
    ITEM_DELETED = "item_deleted"


_OWNER_ONLY = {Mutation.WATCHLIST_CREATED}


def watchlist_fanout(owner_id: str, watchlist_id: str) -> list[str]:
    """The three keys that describe one watchlist and its owner's listing."""
    return [
        watchlist_items_key(watchlist_id),
        watchlist_key(watchlist_id),
        user_watchlists_key(owner_id),
    ]


def keys_for(mutation: Mutation, owner_id: str, watchlist_id: str | None = None) -> list[str]:
    """
    Keys made stale by `mutation`.

    Raises:
        ValueError: If a watchlist-scoped mutation is missing its watchlist id
    """
    if mutation in _OWNER_ONLY:
        return [user_watchlists_key(owner_id)]

    if watchlist_id is None:
        raise ValueError(f"{mutation.value} invalidation needs a watchlist id")

    return watchlist_fanout(owner_id, watchlist_id)


def keys_for_user(user_id: str, watchlist_ids: Iterable[str] = ()) -> list[str]:
    """Keys made stale by deleting a user and everything they own."""
    keys = [user_profile_key(user_id), user_watchlists_key(user_id)]
    for watchlist_id in watchlist_ids:
        keys.extend((watchlist_items_key(watchlist_id), watchlist_key(watchlist_id)))
    return keys


class CacheInvalidator:
    """
    Deletes the key set for a mutation through a `CacheAccessor`.

    Usage:
        invalidator = CacheInvalidator(accessor)
        await invalidator.invalidate(Mutation.ITEM_ADDED, owner_id=user.id, watchlist_id=wl.id)
    """

    def __init__(self, accessor: CacheAccessor):
        self._accessor = accessor

    async def purge(self, keys: list[str]) -> list[str]:
        """
        Delete `keys` concurrently.

        Returns:
            The keys whose delete succeeded
        """
        results = await asyncio.gather(*(self._accessor.delete(key) for key in keys))
        purged = [key for key, ok in zip(keys, results) if ok]

        if len(purged) != len(keys):
            log_stage(
                logger,
                "2.4",
                "Invalidation incomplete",
                level="warning",
                requested=keys,
                purged=purged,
            )
        return purged

    async def invalidate(
        self, mutation: Mutation, owner_id: str, watchlist_id: str | None = None
    ) -> list[str]:
        """STAGE-2.4: Invalidation fanout for a watchlist or item mutation."""
        keys = keys_for(mutation, owner_id, watchlist_id)
        log_stage(logger, "2.4", "Invalidating", level="debug", mutation=mutation.value, keys=keys)
        return await self.purge(keys)

    async def invalidate_user(self, user_id: str, watchlist_ids: Iterable[str] = ()) -> list[str]:
        """Invalidation fanout for a deleted account."""
        return await self.purge(keys_for_user(user_id, watchlist_ids))
