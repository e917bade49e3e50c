"""
Catalog Service
===============

Read-only catalog responses assembled from TMDB and served cache-aside.

WHAT THIS SERVICE OWNS
----------------------
- the home feed (first page of all eight categories)
- paginated category listings
- movie and TV detail pages (details + watch providers [+ seasons])
- search
- the small `MediaItem` summary used to enrich watchlist items

DEGRADATION RULES
-----------------
The TMDB client returns None for anything it could not get. Each aggregate
decides what None means for it:

    Response            Sub-resource     None means
    ------------------  ---------------  ----------------------------------
    home feed           any category     section becomes []
    category page       the page         UpstreamUnavailableError
    details             details record   UpstreamUnavailableError
    details             watch providers  {}
    tv details          one season       season dropped
    search              the page         UpstreamUnavailableError
    media item          summary record   None (caller stores null)

A home feed with an empty section is returned but not cached, so the next
request retries the failed category instead of serving the gap for ten
minutes.
"""

import asyncio
from typing import Any

from showlist.caching.accessor import CacheAccessor
from showlist.caching.keys import HOME_FEED_KEY, details_key, media_key, page_key, search_key
from showlist.core.config.settings import Settings
from showlist.core.exceptions import NotFoundError, UpstreamUnavailableError
from showlist.core.logging import get_logger, log_stage
from showlist.infrastructure.tmdb.client import TMDBClient
from showlist.infrastructure.tmdb.endpoints import CATEGORIES, MediaKind
from showlist.infrastructure.tmdb.mappers import (
    map_detail,
    map_page,
    map_records,
    map_search_result,
    mapper_for,
)

logger = get_logger(__name__)


class CatalogService:
    """
    Usage:
        catalog = CatalogService(accessor, tmdb, settings)

        feed = await catalog.home_feed()
        page = await catalog.category_page("popular_movies", page=2)
        movie = await catalog.movie_details(438631)
    """

    def __init__(self, accessor: CacheAccessor, tmdb: TMDBClient, settings: Settings):
        self._accessor = accessor
        self._tmdb = tmdb
        self._ttl = settings.cache.CACHE_DEFAULT_TTL
        self._image_base_url = settings.tmdb.TMDB_IMAGE_BASE_URL

    # -------------------------------------------------------------------------
    # Home feed
    # -------------------------------------------------------------------------

    async def home_feed(self) -> dict[str, list[dict[str, Any]]]:
        """
        First page of every category, keyed by category name.

        STAGE-4.1: Home feed aggregation
        """
        lookup = await self._accessor.read(HOME_FEED_KEY, self._ttl)
        if lookup.found:
            return lookup.value

        names = list(CATEGORIES)
        pages = await asyncio.gather(*(self._tmdb.category_page(name, 1) for name in names))

        feed: dict[str, list[dict[str, Any]]] = {}
        failed = []
        for name, payload in zip(names, pages):
            if payload is None:
                failed.append(name)
                feed[name] = []
                continue
            mapper = mapper_for(CATEGORIES[name].kind)
            feed[name] = [
                item.model_dump()
                for item in map_records(payload.get("results"), mapper, self._image_base_url)
            ]

        if failed:
            log_stage(logger, "4.1", "Home feed degraded; not caching", level="warning", failed=failed)
        else:
            await self._accessor.write(HOME_FEED_KEY, feed, self._ttl)

        return feed

    # -------------------------------------------------------------------------
    # Category pages
    # -------------------------------------------------------------------------

    async def category_page(self, category: str, page: int = 1) -> dict[str, Any]:
        """
        One page of a listing category.

        Raises:
            NotFoundError: Unknown category name
            UpstreamUnavailableError: TMDB did not return the page
        """
        if category not in CATEGORIES:
            raise NotFoundError(f"Unknown category: {category}")

        async def produce() -> dict[str, Any] | None:
            payload = await self._tmdb.category_page(category, page)
            if payload is None:
                return None
            mapper = mapper_for(CATEGORIES[category].kind)
            return map_page(payload, mapper, self._image_base_url).model_dump()

        result = await self._accessor.get_or_fetch(page_key(category, page), produce, self._ttl)
        if result is None:
            raise UpstreamUnavailableError(
                f"Failed to fetch {category.replace('_', ' ')}",
                details={"category": category, "page": page},
            )
        return result

    # -------------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------------

    async def movie_details(self, tmdb_id: int) -> dict[str, Any]:
        """Movie record with appended sub-resources plus watch providers."""

        async def produce() -> dict[str, Any] | None:
            details, providers = await asyncio.gather(
                self._tmdb.details(MediaKind.MOVIE, tmdb_id),
                self._tmdb.watch_providers(MediaKind.MOVIE, tmdb_id),
            )
            if details is None:
                return None
            return {"details": details, "watch_providers": _provider_results(providers)}

        result = await self._accessor.get_or_fetch(
            details_key(MediaKind.MOVIE.value, tmdb_id), produce, self._ttl
        )
        if result is None:
            raise UpstreamUnavailableError("Failed to fetch movie details", details={"tmdb_id": tmdb_id})
        return result

    async def tv_details(self, tmdb_id: int) -> dict[str, Any]:
        """TV record, watch providers and every season's episode list."""

        async def produce() -> dict[str, Any] | None:
            details, providers = await asyncio.gather(
                self._tmdb.details(MediaKind.TV, tmdb_id),
                self._tmdb.watch_providers(MediaKind.TV, tmdb_id),
            )
            if details is None:
                return None

            season_numbers = [
                season["season_number"]
                for season in details.get("seasons") or ()
                if isinstance(season, dict) and isinstance(season.get("season_number"), int)
            ]
            seasons = await asyncio.gather(
                *(self._tmdb.season(tmdb_id, number) for number in season_numbers)
            )
            missing = len(seasons) - sum(season is not None for season in seasons)
            if missing:
                log_stage(logger, "4.2", "Dropped unavailable seasons", level="warning",
                          tmdb_id=tmdb_id, missing=missing)

            return {
                "details": details,
                "watch_providers": _provider_results(providers),
                "seasons": [season for season in seasons if season is not None],
            }

        result = await self._accessor.get_or_fetch(
            details_key(MediaKind.TV.value, tmdb_id), produce, self._ttl
        )
        if result is None:
            raise UpstreamUnavailableError("Failed to fetch TV show details", details={"tmdb_id": tmdb_id})
        return result

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search(
        self,
        query: str,
        page: int = 1,
        include_adult: bool = False,
        language: str | None = None,
        media_type: str | None = None,
    ) -> dict[str, Any]:
        """
        Search titles. `media_type=None` searches movies and TV together.

        Raises:
            UpstreamUnavailableError: TMDB did not return results
        """
        language = language or self._tmdb.language
        key = search_key(query, page, include_adult, language, media_type)
        mapper = map_search_result if media_type is None else mapper_for(MediaKind(media_type))

        async def produce() -> dict[str, Any] | None:
            payload = await self._tmdb.search(
                query, page=page, include_adult=include_adult, language=language, media_type=media_type
            )
            if payload is None:
                return None
            return map_page(payload, mapper, self._image_base_url).model_dump()

        result = await self._accessor.get_or_fetch(key, produce, self._ttl)
        if result is None:
            raise UpstreamUnavailableError("Failed to fetch search results", details={"query": query})
        return result

    # -------------------------------------------------------------------------
    # Watchlist enrichment
    # -------------------------------------------------------------------------

    async def media_item(self, media_type: str, tmdb_id: int) -> dict[str, Any] | None:
        """
        Summary of one title, or None when TMDB cannot provide it.

        Args:
            media_type: "movie"/"tv" in any case (watchlist rows store "MOVIE"/"TV")
        """
        kind = MediaKind(str(getattr(media_type, "value", media_type)).lower())

        async def produce() -> dict[str, Any] | None:
            record = await self._tmdb.summary(kind, tmdb_id)
            if record is None:
                return None
            item = map_detail(kind, record, self._image_base_url)
            return item.model_dump() if item is not None else None

        return await self._accessor.get_or_fetch(media_key(kind, tmdb_id), produce, self._ttl)


def _provider_results(payload: dict[str, Any] | None) -> dict[str, Any]:
    """Per-country provider map, or {} when providers are unavailable."""
    if not payload:
        return {}
    results = payload.get("results")
    return results if isinstance(results, dict) else {}
