"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from tablecraft.config import DatabaseSettings, PoolSettings, Settings, load_settings
from tablecraft.types import Environment


def test_environment_values() -> None:
    """Test environment enum values."""
    assert Environment.DEVELOPMENT == "development"
    assert Environment.PRODUCTION == "production"
    assert Environment.TESTING == "testing"


def test_default_pool_settings() -> None:
    """Pool defaults match the usual generic pool limits."""
    pool = PoolSettings()

    assert pool.max == 10
    assert pool.min == 2
    assert pool.idle_timeout_millis == 30000
    assert pool.acquire_timeout_millis is None
    assert pool.idle_timeout_seconds == 30.0
    assert pool.acquire_timeout_seconds is None


def test_pool_min_above_max_rejected() -> None:
    with pytest.raises(ValidationError):
        PoolSettings(max=2, min=3)


def test_pool_max_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        PoolSettings(max=0, min=0)


def test_default_database_settings() -> None:
    """An unconfigured target still has a client and pooling enabled."""
    database = DatabaseSettings()

    assert database.client == "sqlite"
    assert database.connection is None
    assert database.is_configured is False
    assert database.pooling_enabled is True
    assert database.debug is False


def test_pooling_disabled() -> None:
    database = DatabaseSettings(connection={"filename": "db.sqlite"}, pool=False)

    assert database.pooling_enabled is False
    assert database.is_configured is True


def test_default_settings() -> None:
    """Test default settings values."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"
        assert settings.is_development is True
        assert settings.database.is_configured is False


def test_load_settings_from_environment() -> None:
    """Test custom settings via environment variables."""
    env_vars = {
        "TABLECRAFT_ENV": "production",
        "TABLECRAFT_LOG_LEVEL": "debug",
        "TABLECRAFT_CLIENT": "mysql",
        "TABLECRAFT_CONNECTION": '{"host": "db.internal", "port": 3306}',
        "TABLECRAFT_POOL_MAX": "20",
        "TABLECRAFT_POOL_MIN": "5",
        "TABLECRAFT_POOL_IDLE_TIMEOUT_MILLIS": "1000",
        "TABLECRAFT_POOL_ACQUIRE_TIMEOUT_MILLIS": "250",
        "TABLECRAFT_DEBUG": "true",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = load_settings()

    assert settings.is_production is True
    assert settings.log_level == "DEBUG"
    assert settings.database.client == "mysql"
    assert settings.database.connection == {"host": "db.internal", "port": 3306}
    assert settings.database.debug is True

    pool = settings.database.pool
    assert isinstance(pool, PoolSettings)
    assert pool.max == 20
    assert pool.min == 5
    assert pool.idle_timeout_millis == 1000
    assert pool.acquire_timeout_seconds == 0.25


@pytest.mark.parametrize("flag", ["false", "0", "no", "off", "FALSE"])
def test_load_settings_pool_disabled(flag: str) -> None:
    with patch.dict(os.environ, {"TABLECRAFT_POOL": flag}, clear=True):
        settings = load_settings()

    assert settings.database.pool is False
    assert settings.database.pooling_enabled is False


def test_testing_mode_properties() -> None:
    """Test testing mode properties."""
    with patch.dict(os.environ, {"TABLECRAFT_ENV": "testing"}, clear=True):
        settings = load_settings()

        assert settings.is_development is False
        assert settings.is_production is False
        assert settings.is_testing is True
