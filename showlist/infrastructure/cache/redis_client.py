"""
Redis Cache Store with Connection Pooling

Architecture:
    RedisClient (Public API, implements CacheStore)
        ├── ConnectionManager (Connection lifecycle)
        ├── OperationExecutor (Command execution with error handling)
        └── HealthMonitor (Health checks and pool metrics)

Every command is bounded by the pool's socket timeout. Backend failures
surface as CacheError subclasses; the cache-aside accessor decides to
swallow them.
"""

import time
from typing import Any

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from showlist.core.config.settings import Settings
from showlist.core.exceptions import CacheConnectionError, CacheKeyError
from showlist.core.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# LAYER 1: CONNECTION MANAGEMENT
# =============================================================================


class ConnectionManager:
    """
    Manages Redis connection lifecycle and pooling.

    Pool Configuration (from settings.redis):
    - Max connections: REDIS_MAX_CONNECTIONS
    - Socket / connect timeouts: REDIS_SOCKET_TIMEOUT / REDIS_SOCKET_CONNECT_TIMEOUT
    - Health check interval: REDIS_HEALTH_CHECK_INTERVAL
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._pool: ConnectionPool | None = None
        self._client: redis.Redis | None = None
        self._is_connected = False

    async def connect(self) -> redis.Redis:
        """
        Establish connection to Redis with connection pooling.

        STAGE-REDIS.2: Connection establishment

        The pool and client are kept when the first PING fails. The pool opens
        sockets per command, so a server that comes back later is picked up
        without another connect().

        Returns:
            redis.Redis: Connected Redis client

        Raises:
            CacheConnectionError: If the server does not answer the PING
        """
        if self._is_connected and self._client:
            return self._client

        redis_settings = self._settings.redis

        if self._client is None:
            self._pool = ConnectionPool(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
                password=redis_settings.REDIS_PASSWORD,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
                decode_responses=True,  # Envelopes are stored as UTF-8 JSON text
            )
            self._client = redis.Redis(connection_pool=self._pool)

        try:
            # Fail fast if the server is not reachable
            await self._client.ping()
            self._is_connected = True

            logger.info(
                "Redis connected successfully",
                stage="REDIS.2",
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            )
            return self._client

        except (ConnectionError, TimeoutError) as e:
            logger.error("Failed to connect to Redis", stage="REDIS.2", error=str(e))
            raise CacheConnectionError(
                message=f"Failed to connect to Redis: {e}",
                details={"host": redis_settings.REDIS_HOST, "port": redis_settings.REDIS_PORT},
            )

    async def disconnect(self) -> None:
        """
        Close Redis client and pool.

        STAGE-REDIS.3: Connection cleanup
        """
        if self._client:
            await self._client.aclose()

        if self._pool:
            await self._pool.disconnect()

        self._client = None
        self._pool = None
        self._is_connected = False

        logger.info("Redis disconnected", stage="REDIS.3")

    async def ping(self) -> bool:
        """Return True if Redis answers a PING; tracks reachability."""
        if self._client is None:
            return False
        try:
            await self._client.ping()
        except RedisError:
            logger.warning("Redis ping failed", stage="REDIS.PING")
            self._is_connected = False
            return False
        self._is_connected = True
        return True

    def get_client(self) -> redis.Redis | None:
        return self._client

    def get_pool(self) -> ConnectionPool | None:
        return self._pool

    def is_connected(self) -> bool:
        return self._is_connected


# =============================================================================
# LAYER 2: OPERATION EXECUTION
# =============================================================================


class OperationExecutor:
    """
    Executes Redis commands with consistent error handling.

    Every RedisError (including socket timeouts) is logged and re-raised as
    CacheKeyError with the key attached.
    """

    def __init__(self, redis_client: redis.Redis):
        self._redis = redis_client

    async def get(self, key: str) -> str | None:
        """STAGE-REDIS.GET: Redis GET operation"""
        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error("Redis GET failed", stage="REDIS.GET", key=key, error=str(e))
            raise CacheKeyError(message=f"Redis GET failed: {e}", details={"key": key})

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """
        STAGE-REDIS.SET: Redis SET operation

        Args:
            key: Redis key
            value: Value to set
            ttl: Physical expiry in seconds (optional)
        """
        try:
            result = await self._redis.set(key, value, ex=ttl)
            return bool(result)
        except RedisError as e:
            logger.error("Redis SET failed", stage="REDIS.SET", key=key, error=str(e))
            raise CacheKeyError(message=f"Redis SET failed: {e}", details={"key": key})

    async def delete(self, *keys: str) -> int:
        """STAGE-REDIS.DEL: Redis DELETE operation"""
        try:
            return await self._redis.delete(*keys)
        except RedisError as e:
            logger.error("Redis DELETE failed", stage="REDIS.DEL", keys=keys, error=str(e))
            raise CacheKeyError(message=f"Redis DELETE failed: {e}", details={"keys": list(keys)})


# =============================================================================
# LAYER 3: HEALTH MONITORING
# =============================================================================


class HealthMonitor:
    """
    Reports Redis reachability, ping latency and pool utilization.
    """

    def __init__(self, connection_manager: ConnectionManager, settings: Settings):
        self._conn_mgr = connection_manager
        self._settings = settings

    async def health_check(self) -> dict[str, Any]:
        """
        STAGE-REDIS.HEALTH: Redis health check

        Returns:
            Dict with health status and metrics
        """
        health = {
            "status": "healthy",
            "backend": "redis",
            "connected": self._conn_mgr.is_connected(),
            "host": self._settings.redis.REDIS_HOST,
            "port": self._settings.redis.REDIS_PORT,
            "pool_size": 0,
            "ping_latency_ms": None,
        }

        client = self._conn_mgr.get_client()
        if not client:
            health["status"] = "unhealthy"
            health["error"] = "Client not initialized"
            return health

        try:
            start = time.perf_counter()
            await client.ping()
            health["ping_latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        except RedisError as e:
            health["status"] = "unhealthy"
            health["error"] = str(e)
            return health

        pool = self._conn_mgr.get_pool()
        if pool:
            health["pool_size"] = pool.max_connections

        return health


# =============================================================================
# LAYER 4: PUBLIC API
# =============================================================================


class RedisClient:
    """
    Async Redis cache store.

    Usage:
        client = RedisClient(settings)
        await client.connect()

        await client.set("key", "value", ttl=1200)
        value = await client.get("key")

        await client.disconnect()
    """

    def __init__(self, settings: Settings):
        """
        STAGE-REDIS.1: Client initialization
        """
        self._settings = settings
        self._conn_mgr = ConnectionManager(settings)
        self._executor: OperationExecutor | None = None
        self._health_monitor = HealthMonitor(self._conn_mgr, settings)

    async def connect(self) -> None:
        """
        Raises:
            CacheConnectionError: If Redis is unreachable. Commands are still
                routed through the pool afterwards and recover with the server.
        """
        try:
            await self._conn_mgr.connect()
        finally:
            client = self._conn_mgr.get_client()
            if client is not None:
                self._executor = OperationExecutor(client)

    async def disconnect(self) -> None:
        await self._conn_mgr.disconnect()
        self._executor = None

    async def ping(self) -> bool:
        return await self._conn_mgr.ping()

    def _require_executor(self) -> OperationExecutor:
        if self._executor is None:
            raise CacheConnectionError("Redis client is not connected")
        return self._executor

    async def get(self, key: str) -> str | None:
        return await self._require_executor().get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        return await self._require_executor().set(key, value, ttl)

    async def delete(self, *keys: str) -> int:
        return await self._require_executor().delete(*keys)

    async def health_check(self) -> dict[str, Any]:
        return await self._health_monitor.health_check()
