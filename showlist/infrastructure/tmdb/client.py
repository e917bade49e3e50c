"""
TMDB HTTP Client
================

Async client for the TMDB v3 API with bounded timeouts, a shared connection
pool and retry on transient transport errors.

FAILURE CONTRACT
----------------
`fetch` never raises. Any of

- transport errors (connect, timeout, protocol) after retries are exhausted
- non-2xx responses
- bodies that are not a JSON object

is logged and returned as None. Callers read None as "this sub-resource is
unavailable" and decide whether that is fatal to their response.

RETRY STRATEGY
--------------
Exponential backoff with jitter (tenacity). Only `httpx.ConnectError` and
`httpx.TimeoutException` are retried; a 4xx/5xx answer would come back the
same way and is not.
"""

from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from showlist.core.config.settings import TMDBSettings
from showlist.core.logging import get_logger, log_stage
from showlist.infrastructure.tmdb.endpoints import (
    CATEGORIES,
    DETAIL_APPENDS,
    SEARCH_PATHS,
    MediaKind,
    details_path,
    season_path,
    watch_providers_path,
)

logger = get_logger(__name__)


class TMDBClient:
    """
    Usage:
        async with TMDBClient(settings.tmdb) as tmdb:
            page = await tmdb.category_page("popular_movies", page=1)
            if page is None:
                ...  # upstream unavailable

    The underlying httpx.AsyncClient is created on enter (or `start()`) and
    shared by every request the application serves.
    """

    def __init__(self, settings: TMDBSettings, transport: httpx.AsyncBaseTransport | None = None):
        """
        Args:
            settings: TMDB section of the application settings
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self._settings = settings
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TMDBClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> None:
        if self._client is not None:
            return

        headers = {"accept": "application/json"}
        if self._settings.TMDB_API_KEY:
            headers["Authorization"] = f"Bearer {self._settings.TMDB_API_KEY}"
        else:
            logger.warning("TMDB_API_KEY is not set; upstream calls will be rejected", stage="TMDB.1")

        self._client = httpx.AsyncClient(
            base_url=self._settings.TMDB_BASE_URL,
            headers=headers,
            timeout=httpx.Timeout(self._settings.TMDB_TIMEOUT),
            limits=httpx.Limits(
                max_connections=self._settings.TMDB_MAX_CONNECTIONS,
                max_keepalive_connections=max(1, self._settings.TMDB_MAX_CONNECTIONS // 2),
            ),
            transport=self._transport,
        )
        logger.debug("TMDB client initialized", stage="TMDB.1", base_url=self._settings.TMDB_BASE_URL)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def language(self) -> str:
        return self._settings.TMDB_LANGUAGE

    # -------------------------------------------------------------------------
    # Core fetch
    # -------------------------------------------------------------------------

    async def _get_with_retry(
        self, client: httpx.AsyncClient, path: str, params: dict[str, Any]
    ) -> httpx.Response:
        @retry(
            stop=stop_after_attempt(max(1, self._settings.TMDB_MAX_RETRIES)),
            wait=wait_exponential_jitter(
                initial=self._settings.TMDB_RETRY_BASE_DELAY,
                max=self._settings.TMDB_RETRY_MAX_DELAY,
            ),
            retry=retry_if_exception_type((httpx.ConnectError, httpx.TimeoutException)),
            reraise=True,
        )
        async def _do_request() -> httpx.Response:
            return await client.get(path, params=params)

        return await _do_request()

    async def fetch(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """
        GET `path` and return the decoded JSON object, or None.

        STAGE-3.0: Upstream fetch
        """
        if self._client is None:
            log_stage(logger, "3.0", "TMDB client used before start()", level="error", path=path)
            return None

        params = {key: value for key, value in (params or {}).items() if value is not None}

        try:
            response = await self._get_with_retry(self._client, path, params)
        except httpx.HTTPError as e:
            log_stage(
                logger,
                "3.0",
                "TMDB request failed",
                level="error",
                path=path,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None

        if not response.is_success:
            log_stage(
                logger,
                "3.0",
                "TMDB returned non-success status",
                level="warning",
                path=path,
                status_code=response.status_code,
            )
            return None

        try:
            data = response.json()
        except ValueError as e:
            log_stage(logger, "3.0", "TMDB returned malformed JSON", level="error", path=path, error=str(e))
            return None

        if not isinstance(data, dict):
            log_stage(logger, "3.0", "TMDB returned a non-object body", level="error", path=path)
            return None

        return data

    # -------------------------------------------------------------------------
    # Endpoint helpers
    # -------------------------------------------------------------------------

    async def category_page(self, category: str, page: int = 1) -> dict[str, Any] | None:
        """One page of a listing category (see endpoints.CATEGORIES)."""
        return await self.fetch(
            CATEGORIES[category].path, {"language": self.language, "page": page}
        )

    async def details(self, kind: MediaKind, tmdb_id: int) -> dict[str, Any] | None:
        """Full detail record with videos, similar titles, recommendations and reviews."""
        return await self.fetch(
            details_path(kind, tmdb_id),
            {"language": self.language, "append_to_response": DETAIL_APPENDS},
        )

    async def summary(self, kind: MediaKind, tmdb_id: int) -> dict[str, Any] | None:
        """Plain detail record, used for watchlist enrichment."""
        return await self.fetch(details_path(kind, tmdb_id), {"language": self.language})

    async def watch_providers(self, kind: MediaKind, tmdb_id: int) -> dict[str, Any] | None:
        return await self.fetch(watch_providers_path(kind, tmdb_id))

    async def season(self, tmdb_id: int, season_number: int) -> dict[str, Any] | None:
        return await self.fetch(season_path(tmdb_id, season_number), {"language": self.language})

    async def search(
        self,
        query: str,
        page: int = 1,
        include_adult: bool = False,
        language: str | None = None,
        media_type: str | None = None,
    ) -> dict[str, Any] | None:
        """Search movies, TV or both (`media_type=None`)."""
        return await self.fetch(
            SEARCH_PATHS[media_type],
            {
                "query": query,
                "page": page,
                "include_adult": "true" if include_adult else "false",
                "language": language or self.language,
            },
        )
