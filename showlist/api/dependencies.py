"""
FastAPI Dependency Injection Module
===================================

HOW DEPENDENCIES ARE WIRED
--------------------------
Long-lived handles are built once in the application lifespan and stored
on `app.state`:

    app.state.settings         Settings
    app.state.accessor         CacheAccessor (wrapping the cache store)
    app.state.database         Database (engine + session factory)
    app.state.tmdb             TMDBClient (shared httpx pool)
    app.state.health_checker   HealthChecker

The providers below read them from the request, so tests can swap any of
them with `app.dependency_overrides` without touching globals.

Per-request objects (the database session, the services) are created by
dependencies and disappear with the request.

Example:
    @router.get("/watchlists")
    async def list_watchlists(user_id: CurrentUserDep, service: WatchlistServiceDep):
        return {"success": True, "watchlists": await service.list_watchlists(user_id)}
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from showlist.caching.accessor import CacheAccessor
from showlist.core.config.settings import Settings
from showlist.core.exceptions import TokenError
from showlist.core.security import decode_access_token
from showlist.infrastructure.database.session import Database
from showlist.infrastructure.monitoring.health_checker import HealthChecker
from showlist.infrastructure.tmdb.client import TMDBClient
from showlist.services.catalog_service import CatalogService
from showlist.services.user_service import UserService
from showlist.services.watchlist_service import WatchlistService

# ============================================================================
# APPLICATION-SCOPED HANDLES
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_accessor(request: Request) -> CacheAccessor:
    return request.app.state.accessor


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_tmdb_client(request: Request) -> TMDBClient:
    return request.app.state.tmdb


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
AccessorDep = Annotated[CacheAccessor, Depends(get_accessor)]
DatabaseDep = Annotated[Database, Depends(get_database)]
TMDBClientDep = Annotated[TMDBClient, Depends(get_tmdb_client)]
HealthCheckerDep = Annotated[HealthChecker, Depends(get_health_checker)]


# ============================================================================
# REQUEST-SCOPED: DATABASE SESSION
# ============================================================================


async def get_session(database: DatabaseDep) -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request.

    Services commit their own unit of work before invalidating the cache;
    the session context only rolls back whatever an error left behind.
    """
    async with database.session() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


# ============================================================================
# AUTHENTICATION
# ============================================================================

# auto_error=False: a missing or non-Bearer header reaches us as None so the
# response can use the application's error envelope.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    settings: SettingsDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """
    Resolve the caller's user id from `Authorization: Bearer <token>`.

    Raises:
        TokenError: (403) Missing header, wrong scheme, bad/expired token
    """
    if credentials is None or not credentials.credentials:
        raise TokenError("unauthorized")
    return decode_access_token(credentials.credentials, settings.auth).user_id


CurrentUserDep = Annotated[str, Depends(get_current_user_id)]


# ============================================================================
# SERVICES
# ============================================================================


def get_catalog_service(
    accessor: AccessorDep, tmdb: TMDBClientDep, settings: SettingsDep
) -> CatalogService:
    return CatalogService(accessor, tmdb, settings)


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]


def get_watchlist_service(
    session: SessionDep,
    accessor: AccessorDep,
    catalog: CatalogServiceDep,
    settings: SettingsDep,
) -> WatchlistService:
    return WatchlistService(session, accessor, catalog, settings)


def get_user_service(session: SessionDep, accessor: AccessorDep, settings: SettingsDep) -> UserService:
    return UserService(session, accessor, settings)


WatchlistServiceDep = Annotated[WatchlistService, Depends(get_watchlist_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
