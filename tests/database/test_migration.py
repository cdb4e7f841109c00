"""Tests for database migration utilities."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from tablecraft.config import DatabaseSettings
from tablecraft.database.context import DatabaseContext
from tablecraft.database.migration import MigrationManager
from tablecraft.database.schema import (
    Blueprint,
    Column,
    ColumnType,
    CreateCommand,
    IndexCommand,
)


@pytest_asyncio.fixture
async def context(sqlite_settings: DatabaseSettings) -> DatabaseContext:
    """Create an initialized SQLite context."""
    context = DatabaseContext(sqlite_settings)
    async with context:
        yield context


@pytest.fixture
def migration_manager(context: DatabaseContext) -> MigrationManager:
    """Create MigrationManager instance."""
    return MigrationManager(context)


def create_tags(context: DatabaseContext) -> list[Blueprint]:
    return [
        Blueprint(
            "tags",
            columns=[
                Column("id", ColumnType.INTEGER, auto_increment=True),
                Column("label", ColumnType.STRING),
            ],
            commands=[CreateCommand(), IndexCommand("label")],
        )
    ]


async def seed_tags(context: DatabaseContext) -> None:
    await context.execute("insert into tags (label) values (?)", ("python",))


def test_migrations_table_compiles(migration_manager: MigrationManager) -> None:
    statements = migration_manager.context.compile(
        migration_manager.migrations_blueprint()
    )

    assert statements == [
        'create table "schema_migrations" (id integer primary key autoincrement, '
        "version varchar not null, applied_at varchar not null)",
        "create unique index schema_migrations_version_unique "
        'on "schema_migrations" ("version")',
    ]


@pytest.mark.asyncio
async def test_ensure_migrations_table_is_idempotent(
    migration_manager: MigrationManager, context: DatabaseContext
) -> None:
    await migration_manager.ensure_migrations_table()
    await migration_manager.ensure_migrations_table()

    assert await context.has_table("schema_migrations") is True
    assert await migration_manager.get_applied_migrations() == []


@pytest.mark.asyncio
async def test_run_migrations_in_version_order(
    migration_manager: MigrationManager, context: DatabaseContext
) -> None:
    migrations = {"002_seed_tags": seed_tags, "001_create_tags": create_tags}

    applied = await migration_manager.run_migrations(migrations)

    assert applied == ["001_create_tags", "002_seed_tags"]
    assert await migration_manager.get_applied_migrations() == applied
    rows = (await context.execute("select label from tags")).rows
    assert rows == [{"label": "python"}]


@pytest.mark.asyncio
async def test_run_migrations_skips_applied(
    migration_manager: MigrationManager,
) -> None:
    await migration_manager.run_migrations({"001_create_tags": create_tags})
    later = AsyncMock(return_value=None)

    applied = await migration_manager.run_migrations(
        {"001_create_tags": create_tags, "002_later": later}
    )

    assert applied == ["002_later"]
    later.assert_awaited_once_with(migration_manager.context)


@pytest.mark.asyncio
async def test_get_migration_status(migration_manager: MigrationManager) -> None:
    await migration_manager.run_migrations({"001_create_tags": create_tags})

    status = await migration_manager.get_migration_status(
        {"001_create_tags": create_tags, "002_seed_tags": seed_tags}
    )

    assert status == {"001_create_tags": True, "002_seed_tags": False}
