"""
Unit Tests for CatalogService

Runs against FakeTMDBClient and an in-memory cache with a settable clock.
"""

import pytest

from showlist.caching.keys import HOME_FEED_KEY, details_key, media_key, page_key, search_key
from showlist.core.exceptions import NotFoundError, UpstreamUnavailableError
from showlist.infrastructure.tmdb.endpoints import CATEGORIES, MediaKind
from showlist.services.catalog_service import CatalogService
from tests.test_fixtures.tmdb_factory import movie_record, page_payload, tv_record

IMAGE_BASE = "https://image.tmdb.org/t/p/w500"


@pytest.fixture
def catalog(accessor, fake_tmdb, test_settings):
    return CatalogService(accessor, fake_tmdb, test_settings)


def _fill_categories(fake_tmdb, skip=()):
    for name, category in CATEGORIES.items():
        if name in skip:
            continue
        record = movie_record(1) if category.kind is MediaKind.MOVIE else tv_record(2)
        fake_tmdb.categories[name] = page_payload([record])


@pytest.mark.unit
class TestHomeFeed:
    async def test_all_sections_present_and_cached(self, catalog, fake_tmdb, accessor):
        _fill_categories(fake_tmdb)

        feed = await catalog.home_feed()

        assert set(feed) == set(CATEGORIES)
        assert feed["popular_movies"][0]["title"] == "Dune"
        assert feed["on_air_tv"][0]["media_type"] == "tv"
        assert (await accessor.read(HOME_FEED_KEY, 600)).found

        await catalog.home_feed()
        assert fake_tmdb.count("category_page") == len(CATEGORIES)

    async def test_failed_section_is_empty_and_not_cached(self, catalog, fake_tmdb, accessor):
        _fill_categories(fake_tmdb, skip={"trending_tv"})

        feed = await catalog.home_feed()

        assert feed["trending_tv"] == []
        assert len(feed["trending_movies"]) == 1
        assert not (await accessor.read(HOME_FEED_KEY, 600)).found

        await catalog.home_feed()
        assert fake_tmdb.count("category_page") == 2 * len(CATEGORIES)

    async def test_expired_feed_is_rebuilt(self, catalog, fake_tmdb, clock):
        _fill_categories(fake_tmdb)
        await catalog.home_feed()

        clock.advance(601)
        await catalog.home_feed()

        assert fake_tmdb.count("category_page") == 2 * len(CATEGORIES)

    async def test_malformed_record_empties_only_its_section(self, catalog, fake_tmdb):
        _fill_categories(fake_tmdb)
        fake_tmdb.categories["popular_movies"] = page_payload([{"id": 7, "original_title": 123}])

        feed = await catalog.home_feed()

        assert feed["popular_movies"] == []
        assert feed["top_rated_movies"][0]["title"] == "Dune"


@pytest.mark.unit
class TestCategoryPage:
    async def test_page_is_mapped_and_cached(self, catalog, fake_tmdb, accessor):
        fake_tmdb.categories["popular_movies"] = page_payload([movie_record(7)], page=2, total_pages=9)

        page = await catalog.category_page("popular_movies", 2)

        assert page["results"][0]["poster_path"] == f"{IMAGE_BASE}/dune.jpg"
        assert page["pagination"] == {"page": 2, "total_pages": 9, "total_results": 1}
        assert (await accessor.read(page_key("popular_movies", 2), 600)).value == page

        await catalog.category_page("popular_movies", 2)
        assert fake_tmdb.count("category_page") == 1

    async def test_unknown_category(self, catalog):
        with pytest.raises(NotFoundError):
            await catalog.category_page("silent_films", 1)

    async def test_upstream_failure_raises_and_is_not_cached(self, catalog, fake_tmdb, accessor):
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await catalog.category_page("top_rated_tv", 1)

        assert exc_info.value.message == "Failed to fetch top rated tv"
        assert exc_info.value.status_code == 503
        assert not (await accessor.read(page_key("top_rated_tv", 1), 600)).found


@pytest.mark.unit
class TestDetails:
    async def test_movie_details_with_providers(self, catalog, fake_tmdb, accessor):
        fake_tmdb.details_records[("movie", 438631)] = {"id": 438631, "title": "Dune"}
        fake_tmdb.providers[("movie", 438631)] = {"id": 438631, "results": {"US": {"flatrate": []}}}

        data = await catalog.movie_details(438631)

        assert data == {
            "details": {"id": 438631, "title": "Dune"},
            "watch_providers": {"US": {"flatrate": []}},
        }
        assert (await accessor.read(details_key("movie", 438631), 600)).found

    async def test_missing_providers_become_empty(self, catalog, fake_tmdb):
        fake_tmdb.details_records[("movie", 1)] = {"id": 1}

        assert (await catalog.movie_details(1))["watch_providers"] == {}

    async def test_missing_details_raise(self, catalog, fake_tmdb):
        with pytest.raises(UpstreamUnavailableError):
            await catalog.movie_details(404)

        with pytest.raises(UpstreamUnavailableError):
            await catalog.movie_details(404)
        assert fake_tmdb.count("details") == 2

    async def test_tv_details_drop_unavailable_seasons(self, catalog, fake_tmdb):
        fake_tmdb.details_records[("tv", 95396)] = {
            "id": 95396,
            "seasons": [{"season_number": 1}, {"season_number": 2}, {"name": "no number"}],
        }
        fake_tmdb.seasons[(95396, 1)] = {"season_number": 1, "episodes": [{"episode_number": 1}]}

        data = await catalog.tv_details(95396)

        assert data["seasons"] == [{"season_number": 1, "episodes": [{"episode_number": 1}]}]
        assert data["watch_providers"] == {}
        assert fake_tmdb.count("season") == 2

    async def test_tv_without_seasons(self, catalog, fake_tmdb):
        fake_tmdb.details_records[("tv", 5)] = {"id": 5}

        assert (await catalog.tv_details(5))["seasons"] == []


@pytest.mark.unit
class TestSearch:
    async def test_multi_search_uses_default_language(self, catalog, fake_tmdb, accessor):
        fake_tmdb.search_payload = page_payload([
            {**movie_record(1), "media_type": "movie"},
            {"id": 2, "name": "Someone", "media_type": "person"},
        ])

        data = await catalog.search("Dune")

        assert [item["id"] for item in data["results"]] == [1]
        assert fake_tmdb.calls[-1] == ("search", "Dune", 1, False, "en-US", None)
        assert (await accessor.read(search_key("Dune", 1, False, "en-US", None), 600)).found

    async def test_typed_search(self, catalog, fake_tmdb):
        fake_tmdb.search_payload = page_payload([tv_record(3)])

        data = await catalog.search("severance", media_type="tv", language="de-DE")

        assert data["results"][0]["title"] == "Severance"
        assert data["results"][0]["media_type"] == "tv"

    async def test_differing_parameters_do_not_share_entries(self, catalog, fake_tmdb):
        fake_tmdb.search_payload = page_payload([])

        await catalog.search("dune", page=1)
        await catalog.search("dune", page=2)
        await catalog.search("dune", page=1, include_adult=True)
        await catalog.search("dune", page=1)

        assert fake_tmdb.count("search") == 3

    async def test_upstream_failure(self, catalog):
        with pytest.raises(UpstreamUnavailableError):
            await catalog.search("dune")


@pytest.mark.unit
class TestMediaItem:
    async def test_summary_is_mapped(self, catalog, fake_tmdb, accessor):
        fake_tmdb.summaries[("movie", 5)] = movie_record(5, title="Arrival")

        item = await catalog.media_item("MOVIE", 5)

        assert item["title"] == "Arrival"
        assert item["media_type"] == "movie"
        assert (await accessor.read(media_key("movie", 5), 600)).found

    async def test_unavailable_summary_is_none(self, catalog, fake_tmdb):
        assert await catalog.media_item("TV", 9) is None
        assert await catalog.media_item("tv", 9) is None
        assert fake_tmdb.count("summary") == 2

    async def test_malformed_summary_is_none(self, catalog, fake_tmdb):
        fake_tmdb.summaries[("movie", 5)] = movie_record(5, title=["Arrival"])

        assert await catalog.media_item("movie", 5) is None
