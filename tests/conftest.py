"""Global pytest configuration and fixtures."""

from logging import Logger
from pathlib import Path

import pytest

from tablecraft import setup_test_logging
from tablecraft.config import DatabaseSettings, PoolSettings
from tablecraft.database.schema import Blueprint, Column, ColumnType, CreateCommand


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from tablecraft import get_logger

    return get_logger("test")


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path using pytest's tmp_path."""
    return tmp_path / "test.db"


@pytest.fixture
def sqlite_settings(temp_db_path: Path) -> DatabaseSettings:
    """Pooled SQLite settings against a temporary database."""
    return DatabaseSettings(
        client="sqlite",
        connection={"filename": str(temp_db_path)},
        pool=PoolSettings(max=4, min=2),
    )


@pytest.fixture
def users_blueprint() -> Blueprint:
    """Create table blueprint for a small users table."""
    return Blueprint(
        "users",
        columns=[
            Column("id", ColumnType.INTEGER, auto_increment=True),
            Column("name", ColumnType.STRING),
            Column("age", ColumnType.INTEGER, nullable=True),
        ],
        commands=[CreateCommand()],
    )
