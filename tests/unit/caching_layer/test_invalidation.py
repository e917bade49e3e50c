"""
Unit Tests for Invalidation Fanout
"""

import pytest

from showlist.caching.accessor import CacheAccessor
from showlist.caching.invalidation import (
    CacheInvalidator,
    Mutation,
    keys_for,
    keys_for_user,
)
from showlist.core.exceptions import CacheKeyError
from tests.test_fixtures.cache_factory import FakeClock


@pytest.mark.unit
class TestKeysFor:
    def test_watchlist_created_touches_owner_listing_only(self):
        assert keys_for(Mutation.WATCHLIST_CREATED, "u1") == ["user_watchlists_u1"]

    @pytest.mark.parametrize(
        "mutation",
        [
            Mutation.WATCHLIST_UPDATED,
            Mutation.WATCHLIST_DELETED,
            Mutation.ITEM_ADDED,
            Mutation.ITEM_UPDATED,
            Mutation.ITEM_DELETED,
        ],
    )
    def test_watchlist_scoped_mutations_fan_out(self, mutation):
        assert set(keys_for(mutation, "u1", "w1")) == {
            "watchlist_items_w1",
            "watchlist_w1",
            "user_watchlists_u1",
        }

    def test_missing_watchlist_id_rejected(self):
        with pytest.raises(ValueError):
            keys_for(Mutation.ITEM_ADDED, "u1")

    def test_user_deletion_covers_every_owned_list(self):
        keys = keys_for_user("u1", ["w1", "w2"])

        assert set(keys) == {
            "user_profile_u1",
            "user_watchlists_u1",
            "watchlist_items_w1",
            "watchlist_w1",
            "watchlist_items_w2",
            "watchlist_w2",
        }


@pytest.mark.unit
class TestCacheInvalidator:
    async def test_invalidate_removes_all_keys(self, accessor):
        for key in ("watchlist_items_w1", "watchlist_w1", "user_watchlists_u1", "watchlist_w2"):
            await accessor.write(key, {"cached": True}, ttl=600)

        purged = await CacheInvalidator(accessor).invalidate(Mutation.ITEM_ADDED, "u1", "w1")

        assert set(purged) == {"watchlist_items_w1", "watchlist_w1", "user_watchlists_u1"}
        for key in purged:
            assert not (await accessor.read(key, ttl=600)).found
        # Unrelated watchlist untouched
        assert (await accessor.read("watchlist_w2", ttl=600)).found

    async def test_absent_keys_are_not_failures(self, accessor):
        purged = await CacheInvalidator(accessor).invalidate(Mutation.WATCHLIST_DELETED, "u1", "w9")

        assert len(purged) == 3

    async def test_one_failed_delete_does_not_stop_the_rest(self, memory_store):
        class FlakyStore:
            def __init__(self, inner):
                self.inner = inner

            async def get(self, key):
                return await self.inner.get(key)

            async def set(self, key, value, ttl=None):
                return await self.inner.set(key, value, ttl)

            async def delete(self, *keys):
                if "watchlist_w1" in keys:
                    raise CacheKeyError("DEL failed")
                return await self.inner.delete(*keys)

        accessor = CacheAccessor(FlakyStore(memory_store), clock=FakeClock())
        await accessor.write("watchlist_items_w1", [1], ttl=600)
        await accessor.write("user_watchlists_u1", [1], ttl=600)

        purged = await CacheInvalidator(accessor).invalidate(Mutation.ITEM_DELETED, "u1", "w1")

        assert set(purged) == {"watchlist_items_w1", "user_watchlists_u1"}
        assert not (await accessor.read("watchlist_items_w1", ttl=600)).found
        assert not (await accessor.read("user_watchlists_u1", ttl=600)).found

    async def test_invalidate_user(self, accessor):
        await accessor.write("user_profile_u1", {"first_name": "Ada"}, ttl=1800)
        await accessor.write("watchlist_items_w1", [], ttl=600)

        await CacheInvalidator(accessor).invalidate_user("u1", ["w1"])

        assert not (await accessor.read("user_profile_u1", ttl=1800)).found
        assert not (await accessor.read("watchlist_items_w1", ttl=600)).found
