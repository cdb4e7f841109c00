"""Configuration management for tablecraft."""

import json
import os
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from .types import Environment


class PoolSettings(BaseModel):
    """Connection pool limits for one database target."""

    max: int = Field(default=10, ge=1, description="Maximum open connections")
    min: int = Field(default=2, ge=0, description="Connections kept warm")
    idle_timeout_millis: int = Field(
        default=30000,
        ge=0,
        description="Idle time after which a spare connection is closed",
    )
    acquire_timeout_millis: int | None = Field(
        default=None,
        ge=0,
        description="How long acquire() may wait for a free connection",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "PoolSettings":
        if self.min > self.max:
            raise ValueError(f"pool min ({self.min}) exceeds pool max ({self.max})")
        return self

    @property
    def idle_timeout_seconds(self) -> float:
        return self.idle_timeout_millis / 1000.0

    @property
    def acquire_timeout_seconds(self) -> float | None:
        if self.acquire_timeout_millis is None:
            return None
        return self.acquire_timeout_millis / 1000.0


class DatabaseSettings(BaseModel):
    """Settings for one configured database target.

    ``pool`` set to ``False`` disables pooling: a single long-lived connection
    then serves every statement.
    """

    client: str = Field(default="sqlite", description="Dialect / driver name")
    connection: dict[str, Any] | None = Field(
        default=None, description="Driver-specific connection settings"
    )
    pool: PoolSettings | Literal[False] = Field(default_factory=PoolSettings)
    debug: bool = Field(default=False, description="Log every dispatched statement")

    @property
    def pooling_enabled(self) -> bool:
        return self.pool is not False

    @property
    def is_configured(self) -> bool:
        return bool(self.connection)


class Settings(BaseModel):
    """Application settings."""

    version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


def _load_pool_settings() -> PoolSettings | Literal[False]:
    """Build pool settings from TABLECRAFT_POOL_* variables."""
    pool_flag = os.getenv("TABLECRAFT_POOL", "true").lower()
    if pool_flag in ["false", "0", "no", "off"]:
        return False

    acquire_timeout = os.getenv("TABLECRAFT_POOL_ACQUIRE_TIMEOUT_MILLIS")
    return PoolSettings(
        max=int(os.getenv("TABLECRAFT_POOL_MAX", "10")),
        min=int(os.getenv("TABLECRAFT_POOL_MIN", "2")),
        idle_timeout_millis=int(
            os.getenv("TABLECRAFT_POOL_IDLE_TIMEOUT_MILLIS", "30000")
        ),
        acquire_timeout_millis=int(acquire_timeout) if acquire_timeout else None,
    )


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    # Connection settings are driver-specific, so they travel as a JSON object
    connection_json = os.getenv("TABLECRAFT_CONNECTION")
    connection = json.loads(connection_json) if connection_json else None

    database = DatabaseSettings(
        client=os.getenv("TABLECRAFT_CLIENT", "sqlite"),
        connection=connection,
        pool=_load_pool_settings(),
        debug=os.getenv("TABLECRAFT_DEBUG", "false").lower() in ["true", "1", "yes"],
    )

    return Settings(
        environment=Environment(os.getenv("TABLECRAFT_ENV", "development")),
        log_level=os.getenv("TABLECRAFT_LOG_LEVEL", "INFO").upper(),
        database=database,
    )
