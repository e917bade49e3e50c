#!/usr/bin/env python3
"""
FastAPI Application Entry Point

Builds the Showlist API: lifespan-managed handles (cache store, accessor,
database, TMDB client, health checker), middleware, error handlers and the
versioned routers.

Run locally:
    uvicorn showlist.app:create_app --factory --reload
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from showlist.api.middleware.error_handler import register_error_handlers
from showlist.api.routes import (
    auth_router,
    health_router,
    home_router,
    search_router,
    user_router,
    watchlists_router,
)
from showlist.caching.accessor import CacheAccessor
from showlist.core.config.constants import HEADER_REQUEST_ID
from showlist.core.config.settings import Settings, check_production_settings, get_settings
from showlist.core.exceptions import CacheConnectionError
from showlist.core.logging import clear_request_id, get_logger, set_request_id, setup_logging
from showlist.infrastructure.cache import build_cache_store
from showlist.infrastructure.database.session import Database
from showlist.infrastructure.monitoring.health_checker import HealthChecker
from showlist.infrastructure.tmdb.client import TMDBClient

logger = get_logger(__name__)


# ============================================================================
# Application Lifespan
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup and shutdown).

    An unreachable cache store is not fatal: the accessor turns every store
    error into a miss, so the API keeps serving from the origin.
    """
    settings: Settings = app.state.settings
    check_production_settings(settings)

    setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)
    logger.info(
        "Starting Showlist API",
        environment=settings.app.ENVIRONMENT,
        version=settings.app.APP_VERSION,
        cache_backend=settings.cache.CACHE_BACKEND,
    )

    store = build_cache_store(settings)
    database = Database(settings.database)
    tmdb = TMDBClient(settings.tmdb)

    try:
        try:
            await store.connect()
            logger.info("Cache store connected")
        except CacheConnectionError as e:
            logger.warning("Cache store unreachable at startup; commands retry per request", error=str(e))

        accessor = CacheAccessor(store, default_ttl=settings.cache.CACHE_DEFAULT_TTL)

        if settings.database.DATABASE_AUTO_CREATE:
            await database.create_all()

        await tmdb.start()

        app.state.cache_store = store
        app.state.accessor = accessor
        app.state.database = database
        app.state.tmdb = tmdb
        app.state.health_checker = HealthChecker(settings, accessor, database)

        logger.info("Application startup complete")
        yield
    finally:
        logger.info("Shutting down application")

        await tmdb.close()
        await database.dispose()
        await store.disconnect()

        logger.info("Application shutdown complete")


# ============================================================================
# Application Factory
# ============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to the process-wide settings.
            Tests pass their own so every app gets an isolated configuration.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Backend for a movie and TV tracking app, fronting TMDB with a cache-aside layer",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # Middleware runs in reverse order of registration; the catch-all error
    # middleware is added first so CORS headers wrap error responses too.
    register_error_handlers(app, include_traceback=settings.app.ENVIRONMENT == "development")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[HEADER_REQUEST_ID],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Attach a request id to the logging context and the response."""
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)
        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response
        finally:
            clear_request_id()

    base_path = settings.app.API_BASE_PATH
    for router in (health_router, auth_router, user_router, home_router, search_router, watchlists_router):
        app.include_router(router, prefix=base_path)

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    return app


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "showlist.app:create_app",
        factory=True,
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
