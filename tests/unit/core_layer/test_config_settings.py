"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from showlist.core.config.settings import (
    Settings,
    check_production_settings,
    get_settings,
    reload_settings,
)
from showlist.core.exceptions import ConfigurationError


@pytest.mark.unit
class TestSettingsDefaults:
    """Test Settings defaults and nested views."""

    def test_cache_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.cache.CACHE_DEFAULT_TTL == 600
        assert settings.cache.CACHE_PROFILE_TTL == 1800
        assert settings.cache.CACHE_BACKEND in ("redis", "memory")

    def test_tmdb_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.tmdb.TMDB_BASE_URL.startswith("https://")
        assert settings.tmdb.TMDB_IMAGE_BASE_URL == "https://image.tmdb.org/t/p/w500"
        assert settings.tmdb.TMDB_MAX_RETRIES >= 1

    def test_auth_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.auth.JWT_ALGORITHM == "HS256"
        assert settings.auth.JWT_EXPIRE_SECONDS == 7 * 24 * 60 * 60

    def test_nested_views_follow_overrides(self):
        settings = Settings(
            _env_file=None, REDIS_HOST="cache.internal", DATABASE_URL="sqlite+aiosqlite:///x.db"
        )

        assert settings.redis.REDIS_HOST == "cache.internal"
        assert settings.database.DATABASE_URL == "sqlite+aiosqlite:///x.db"


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validators."""

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").logging.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="LOUD")

    @pytest.mark.parametrize("field", ["CACHE_DEFAULT_TTL", "CACHE_PROFILE_TTL"])
    def test_non_positive_ttl_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_unknown_cache_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, CACHE_BACKEND="memcached")


@pytest.mark.unit
class TestEnvironmentLoading:
    """Test environment variable loading."""

    def test_values_read_from_environment(self):
        with patch.dict(os.environ, {"CACHE_DEFAULT_TTL": "120", "TMDB_LANGUAGE": "fr-FR"}):
            settings = Settings(_env_file=None)

        assert settings.cache.CACHE_DEFAULT_TTL == 120
        assert settings.tmdb.TMDB_LANGUAGE == "fr-FR"

    def test_get_settings_is_singleton(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        first = get_settings()

        reloaded = reload_settings()

        assert reloaded is not first
        assert get_settings() is reloaded


@pytest.mark.unit
class TestProductionCheck:
    """Test the startup guard against development secrets."""

    def test_development_is_not_checked(self):
        check_production_settings(Settings(_env_file=None, ENVIRONMENT="development"))

    def test_production_with_defaults_rejected(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", TMDB_API_KEY=None)

        with pytest.raises(ConfigurationError) as exc_info:
            check_production_settings(settings)
        assert exc_info.value.details["settings"] == ["JWT_SECRET", "TMDB_API_KEY"]

    def test_production_with_secrets_accepted(self):
        check_production_settings(
            Settings(
                _env_file=None,
                ENVIRONMENT="production",
                JWT_SECRET="a-real-production-secret-value",
                TMDB_API_KEY="token",
            )
        )
