"""
Unit Tests for WatchlistService

SQLite-backed session, in-memory cache and a fake catalog upstream.
"""

from datetime import datetime, timezone

import pytest

from showlist.caching.keys import user_watchlists_key, watchlist_items_key, watchlist_key
from showlist.core.exceptions import (
    DuplicateItemError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from showlist.infrastructure.database.models import MediaType, WatchStatus
from showlist.infrastructure.database.repositories import UserRepository
from showlist.services.catalog_service import CatalogService
from showlist.services.watchlist_service import WatchlistService
from tests.test_fixtures.tmdb_factory import movie_record


@pytest.fixture
def service(session, accessor, fake_tmdb, test_settings):
    catalog = CatalogService(accessor, fake_tmdb, test_settings)
    return WatchlistService(session, accessor, catalog, test_settings)


@pytest.fixture
async def owner_id(session):
    user = await UserRepository(session).create("ada@example.com", "hash", "Ada", "Lovelace")
    return user.id


@pytest.fixture
async def stranger_id(session):
    user = await UserRepository(session).create("eve@example.com", "hash", "Eve", "Smith")
    return user.id


async def _cached(accessor, key) -> bool:
    return (await accessor.read(key, 600)).found


async def _warm_views(service, accessor, owner_id, watchlist_id) -> list[str]:
    """Read every cached view of one watchlist and return the keys now populated."""
    await service.list_watchlists(owner_id)
    await service.get_watchlist(owner_id, watchlist_id)
    await service.get_items(owner_id, watchlist_id)
    keys = [watchlist_items_key(watchlist_id), watchlist_key(watchlist_id), user_watchlists_key(owner_id)]
    for key in keys:
        assert await _cached(accessor, key)
    return keys


@pytest.mark.unit
class TestWatchlists:
    async def test_create_and_list(self, service, owner_id):
        created = await service.create_watchlist(owner_id, "  Weekend  ")

        assert created["name"] == "Weekend"
        assert created["owner_id"] == owner_id
        assert "items" not in created

        listed = await service.list_watchlists(owner_id)
        assert [wl["id"] for wl in listed] == [created["id"]]
        assert listed[0]["items"] == []

    async def test_blank_name_rejected(self, service, owner_id):
        with pytest.raises(ValidationFailedError):
            await service.create_watchlist(owner_id, "   ")

    async def test_create_invalidates_listing(self, service, owner_id, accessor):
        await service.create_watchlist(owner_id, "First")
        await service.list_watchlists(owner_id)
        assert await _cached(accessor, user_watchlists_key(owner_id))

        await service.create_watchlist(owner_id, "Second")

        assert not await _cached(accessor, user_watchlists_key(owner_id))
        assert len(await service.list_watchlists(owner_id)) == 2

    async def test_get_watchlist_ownership(self, service, owner_id, stranger_id):
        created = await service.create_watchlist(owner_id, "Mine")

        assert (await service.get_watchlist(owner_id, created["id"]))["items"] == []
        with pytest.raises(PermissionDeniedError):
            await service.get_watchlist(stranger_id, created["id"])
        with pytest.raises(NotFoundError):
            await service.get_watchlist(owner_id, "no-such-watchlist")

    async def test_rename_invalidates(self, service, owner_id, accessor):
        created = await service.create_watchlist(owner_id, "Old")
        await service.get_watchlist(owner_id, created["id"])
        await service.list_watchlists(owner_id)

        renamed = await service.update_watchlist(owner_id, created["id"], "New")

        assert renamed["name"] == "New"
        assert not await _cached(accessor, watchlist_key(created["id"]))
        assert not await _cached(accessor, user_watchlists_key(owner_id))
        assert (await service.get_watchlist(owner_id, created["id"]))["name"] == "New"

    async def test_stranger_cannot_rename_or_delete(self, service, owner_id, stranger_id):
        created = await service.create_watchlist(owner_id, "Mine")

        with pytest.raises(PermissionDeniedError):
            await service.update_watchlist(stranger_id, created["id"], "Theirs")
        with pytest.raises(PermissionDeniedError):
            await service.delete_watchlist(stranger_id, created["id"])

    async def test_delete_removes_items(self, service, owner_id):
        first = await service.create_watchlist(owner_id, "First")
        second = await service.create_watchlist(owner_id, "Second")
        await service.add_item(owner_id, first["id"], 438631, MediaType.MOVIE)

        await service.delete_watchlist(owner_id, first["id"])

        with pytest.raises(NotFoundError):
            await service.get_watchlist(owner_id, first["id"])
        # The title is free again once its only watchlist is gone
        item = await service.add_item(owner_id, second["id"], 438631, MediaType.MOVIE)
        assert item["watchlist_id"] == second["id"]

    async def test_delete_invalidates(self, service, owner_id, accessor):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)
        keys = await _warm_views(service, accessor, owner_id, watchlist["id"])

        await service.delete_watchlist(owner_id, watchlist["id"])

        for key in keys:
            assert not await _cached(accessor, key)
        assert await service.list_watchlists(owner_id) == []
        with pytest.raises(NotFoundError):
            await service.get_items(owner_id, watchlist["id"])


@pytest.mark.unit
class TestItems:
    async def test_add_item_defaults(self, service, owner_id):
        watchlist = await service.create_watchlist(owner_id, "Weekend")

        item = await service.add_item(owner_id, watchlist["id"], 438631, MediaType.MOVIE)

        assert item["tmdb_id"] == 438631
        assert item["media_type"] == "MOVIE"
        assert item["status"] == "PLANNED"
        assert item["scheduled_at"] is None

    async def test_duplicate_title_rejected_across_watchlists(self, service, owner_id):
        first = await service.create_watchlist(owner_id, "First")
        second = await service.create_watchlist(owner_id, "Second")
        await service.add_item(owner_id, first["id"], 438631, MediaType.MOVIE)

        with pytest.raises(DuplicateItemError) as exc_info:
            await service.add_item(owner_id, second["id"], 438631, MediaType.MOVIE)
        assert exc_info.value.status_code == 400

    async def test_add_to_foreign_watchlist(self, service, owner_id, stranger_id):
        watchlist = await service.create_watchlist(owner_id, "Mine")

        with pytest.raises(PermissionDeniedError):
            await service.add_item(stranger_id, watchlist["id"], 1, MediaType.TV)

    async def test_items_enriched_with_media_details(self, service, owner_id, fake_tmdb):
        fake_tmdb.summaries[("movie", 438631)] = movie_record(438631, title="Dune")
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        await service.add_item(owner_id, watchlist["id"], 438631, MediaType.MOVIE)
        await service.add_item(owner_id, watchlist["id"], 95396, MediaType.TV)

        items = {item["tmdb_id"]: item for item in await service.get_items(owner_id, watchlist["id"])}

        assert items[438631]["media_details"]["title"] == "Dune"
        assert items[95396]["media_details"] is None

    async def test_add_invalidates_cached_items(self, service, owner_id, accessor):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        assert await service.get_items(owner_id, watchlist["id"]) == []
        assert await _cached(accessor, watchlist_items_key(watchlist["id"]))

        await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)

        assert not await _cached(accessor, watchlist_items_key(watchlist["id"]))
        assert len(await service.get_items(owner_id, watchlist["id"])) == 1

    async def test_update_item(self, service, owner_id):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        when = datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc)
        item = await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE, scheduled_at=when)

        updated = await service.update_item(owner_id, watchlist["id"], item["id"], status=WatchStatus.WATCHED)
        assert updated["status"] == "WATCHED"
        assert updated["scheduled_at"].startswith("2030-01-01T20:00:00")

        cleared = await service.update_item(owner_id, watchlist["id"], item["id"], scheduled_at=None)
        assert cleared["scheduled_at"] is None
        assert cleared["status"] == "WATCHED"

    async def test_update_without_fields(self, service, owner_id):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        item = await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)

        with pytest.raises(ValidationFailedError):
            await service.update_item(owner_id, watchlist["id"], item["id"])

    async def test_item_must_belong_to_watchlist(self, service, owner_id):
        first = await service.create_watchlist(owner_id, "First")
        second = await service.create_watchlist(owner_id, "Second")
        item = await service.add_item(owner_id, first["id"], 1, MediaType.MOVIE)

        with pytest.raises(NotFoundError):
            await service.update_item(owner_id, second["id"], item["id"], status=WatchStatus.WATCHED)
        with pytest.raises(NotFoundError):
            await service.delete_item(owner_id, second["id"], item["id"])

    async def test_delete_item(self, service, owner_id):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        item = await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)
        await service.get_items(owner_id, watchlist["id"])

        await service.delete_item(owner_id, watchlist["id"], item["id"])

        assert await service.get_items(owner_id, watchlist["id"]) == []

    async def test_update_item_invalidates(self, service, owner_id, accessor):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        item = await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)
        keys = await _warm_views(service, accessor, owner_id, watchlist["id"])

        await service.update_item(owner_id, watchlist["id"], item["id"], status=WatchStatus.WATCHED)

        for key in keys:
            assert not await _cached(accessor, key)
        assert (await service.get_items(owner_id, watchlist["id"]))[0]["status"] == "WATCHED"
        assert (await service.get_watchlist(owner_id, watchlist["id"]))["items"][0]["status"] == "WATCHED"
        assert (await service.list_watchlists(owner_id))[0]["items"][0]["status"] == "WATCHED"

    async def test_delete_item_invalidates(self, service, owner_id, accessor):
        watchlist = await service.create_watchlist(owner_id, "Weekend")
        item = await service.add_item(owner_id, watchlist["id"], 1, MediaType.MOVIE)
        keys = await _warm_views(service, accessor, owner_id, watchlist["id"])

        await service.delete_item(owner_id, watchlist["id"], item["id"])

        for key in keys:
            assert not await _cached(accessor, key)
        assert (await service.get_watchlist(owner_id, watchlist["id"]))["items"] == []
        assert (await service.list_watchlists(owner_id))[0]["items"] == []
