#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

Type-safe, environment-based configuration for the Showlist API. Every
tunable (cache TTLs, upstream endpoints, database URL, token signing) is
declared here once and read through `get_settings()`.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing: build a `Settings(...)` with overrides and hand it to `create_app`
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from showlist.core.exceptions.base import ConfigurationError


class RedisSettings(BaseSettings):
    """
    Redis configuration for the shared cache store.

    STAGE-0.1: Redis connection configuration

    Socket timeouts bound every store call so a slow Redis degrades to a
    cache miss instead of stalling the request.
    """

    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=2.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Cache-aside configuration.

    STAGE-2: Cache TTL configuration

    TTLs are logical freshness windows. The store keeps each entry for twice
    the TTL so unread keys are eventually reclaimed.
    """

    CACHE_BACKEND: Literal["redis", "memory"] = Field(
        default="redis", description="Cache store implementation"
    )
    CACHE_DEFAULT_TTL: int = Field(default=600, description="Catalog response TTL (10 minutes)")
    CACHE_PROFILE_TTL: int = Field(default=1800, description="User profile TTL (30 minutes)")
    CACHE_MEMORY_MAX_SIZE: int = Field(default=5000, description="In-memory store max entries")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class TMDBSettings(BaseSettings):
    """
    TMDB upstream configuration.

    STAGE-0.2: Upstream provider configuration
    """

    TMDB_API_KEY: str | None = Field(default=None, description="TMDB v4 read access token")
    TMDB_BASE_URL: str = Field(default="https://api.themoviedb.org/3", description="TMDB API base URL")
    TMDB_IMAGE_BASE_URL: str = Field(
        default="https://image.tmdb.org/t/p/w500", description="Poster image base URL"
    )
    TMDB_LANGUAGE: str = Field(default="en-US", description="Default response language")
    TMDB_TIMEOUT: float = Field(default=10.0, description="Request timeout in seconds")
    TMDB_MAX_RETRIES: int = Field(default=3, description="Attempts for transient transport errors")
    TMDB_RETRY_BASE_DELAY: float = Field(default=0.5, description="Initial backoff in seconds")
    TMDB_RETRY_MAX_DELAY: float = Field(default=4.0, description="Backoff ceiling in seconds")
    TMDB_MAX_CONNECTIONS: int = Field(default=50, description="Connection pool size")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class DatabaseSettings(BaseSettings):
    """
    Relational store configuration.

    STAGE-0.3: Database configuration
    """

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./showlist.db", description="SQLAlchemy async database URL"
    )
    DATABASE_ECHO: bool = Field(default=False, description="Log emitted SQL")
    DATABASE_AUTO_CREATE: bool = Field(default=True, description="Create tables on startup")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class AuthSettings(BaseSettings):
    """
    Signed-token configuration.

    STAGE-0.4: Authentication configuration
    """

    JWT_SECRET: str = Field(
        default="showlist-development-secret-change-me-in-production",
        description="HMAC secret for access tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Token signing algorithm")
    JWT_EXPIRE_SECONDS: int = Field(default=7 * 24 * 60 * 60, description="Token lifetime (7 days)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """
    General application settings.

    STAGE-0: Application initialization
    """

    ENVIRONMENT: Literal["development", "test", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Showlist API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for every API route")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from showlist.core.config.settings import get_settings

        settings = get_settings()
        ttl = settings.cache.CACHE_DEFAULT_TTL
        base_url = settings.tmdb.TMDB_BASE_URL
    """

    # Redis settings
    REDIS_HOST: str = Field(default="localhost", description="Redis server host")
    REDIS_PORT: int = Field(default=6379, description="Redis server port")
    REDIS_DB: int = Field(default=0, description="Redis database number")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum pooled connections")
    REDIS_SOCKET_TIMEOUT: float = Field(default=2.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=2.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Cache settings
    CACHE_BACKEND: Literal["redis", "memory"] = Field(
        default="redis", description="Cache store implementation"
    )
    CACHE_DEFAULT_TTL: int = Field(default=600, description="Catalog response TTL (10 minutes)")
    CACHE_PROFILE_TTL: int = Field(default=1800, description="User profile TTL (30 minutes)")
    CACHE_MEMORY_MAX_SIZE: int = Field(default=5000, description="In-memory store max entries")

    # TMDB settings
    TMDB_API_KEY: str | None = Field(default=None, description="TMDB v4 read access token")
    TMDB_BASE_URL: str = Field(default="https://api.themoviedb.org/3", description="TMDB API base URL")
    TMDB_IMAGE_BASE_URL: str = Field(
        default="https://image.tmdb.org/t/p/w500", description="Poster image base URL"
    )
    TMDB_LANGUAGE: str = Field(default="en-US", description="Default response language")
    TMDB_TIMEOUT: float = Field(default=10.0, description="Request timeout in seconds")
    TMDB_MAX_RETRIES: int = Field(default=3, description="Attempts for transient transport errors")
    TMDB_RETRY_BASE_DELAY: float = Field(default=0.5, description="Initial backoff in seconds")
    TMDB_RETRY_MAX_DELAY: float = Field(default=4.0, description="Backoff ceiling in seconds")
    TMDB_MAX_CONNECTIONS: int = Field(default=50, description="Connection pool size")

    # Database settings
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./showlist.db", description="SQLAlchemy async database URL"
    )
    DATABASE_ECHO: bool = Field(default=False, description="Log emitted SQL")
    DATABASE_AUTO_CREATE: bool = Field(default=True, description="Create tables on startup")

    # Auth settings
    JWT_SECRET: str = Field(
        default="showlist-development-secret-change-me-in-production",
        description="HMAC secret for access tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="Token signing algorithm")
    JWT_EXPIRE_SECONDS: int = Field(default=7 * 24 * 60 * 60, description="Token lifetime (7 days)")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "test", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Showlist API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for every API route")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("CACHE_DEFAULT_TTL", "CACHE_PROFILE_TTL")
    @classmethod
    def validate_ttl(cls, v):
        """TTLs must be positive whole seconds."""
        if v <= 0:
            raise ValueError("cache TTLs must be positive")
        return v

    # Nested configuration views
    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def cache(self) -> "CacheSettings":
        """Get cache settings."""
        return CacheSettings(
            CACHE_BACKEND=self.CACHE_BACKEND,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_PROFILE_TTL=self.CACHE_PROFILE_TTL,
            CACHE_MEMORY_MAX_SIZE=self.CACHE_MEMORY_MAX_SIZE,
        )

    @property
    def tmdb(self) -> "TMDBSettings":
        """Get TMDB settings."""
        return TMDBSettings(
            TMDB_API_KEY=self.TMDB_API_KEY,
            TMDB_BASE_URL=self.TMDB_BASE_URL,
            TMDB_IMAGE_BASE_URL=self.TMDB_IMAGE_BASE_URL,
            TMDB_LANGUAGE=self.TMDB_LANGUAGE,
            TMDB_TIMEOUT=self.TMDB_TIMEOUT,
            TMDB_MAX_RETRIES=self.TMDB_MAX_RETRIES,
            TMDB_RETRY_BASE_DELAY=self.TMDB_RETRY_BASE_DELAY,
            TMDB_RETRY_MAX_DELAY=self.TMDB_RETRY_MAX_DELAY,
            TMDB_MAX_CONNECTIONS=self.TMDB_MAX_CONNECTIONS,
        )

    @property
    def database(self) -> "DatabaseSettings":
        """Get database settings."""
        return DatabaseSettings(
            DATABASE_URL=self.DATABASE_URL,
            DATABASE_ECHO=self.DATABASE_ECHO,
            DATABASE_AUTO_CREATE=self.DATABASE_AUTO_CREATE,
        )

    @property
    def auth(self) -> "AuthSettings":
        """Get auth settings."""
        return AuthSettings(
            JWT_SECRET=self.JWT_SECRET,
            JWT_ALGORITHM=self.JWT_ALGORITHM,
            JWT_EXPIRE_SECONDS=self.JWT_EXPIRE_SECONDS,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    @property
    def app(self) -> "ApplicationSettings":
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            DEBUG=self.DEBUG,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
            API_HOST=self.API_HOST,
            API_PORT=self.API_PORT,
            API_BASE_PATH=self.API_BASE_PATH,
            CORS_ORIGINS=self.CORS_ORIGINS,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    STAGE-0.5: Settings initialization

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def check_production_settings(settings: Settings) -> None:
    """
    Refuse to start a production deployment with development secrets.

    Raises:
        ConfigurationError: JWT_SECRET is unset (still the default) or
            TMDB_API_KEY is missing while ENVIRONMENT is "production"
    """
    if settings.app.ENVIRONMENT != "production":
        return

    problems = []
    if settings.auth.JWT_SECRET == AuthSettings.model_fields["JWT_SECRET"].default:
        problems.append("JWT_SECRET")
    if not settings.tmdb.TMDB_API_KEY:
        problems.append("TMDB_API_KEY")

    if problems:
        raise ConfigurationError(
            f"Missing production configuration: {', '.join(problems)}",
            details={"settings": problems},
        )


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
