"""Database migration utilities."""

import inspect
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime, timezone

from tablecraft.database.context import DatabaseContext
from tablecraft.database.schema import (
    Blueprint,
    Column,
    ColumnType,
    CreateCommand,
    UniqueCommand,
)
from tablecraft.log import get_logger

logger = get_logger(__name__)

# A migration returns the blueprints to apply, or runs its own statements
MigrationFunc = Callable[
    [DatabaseContext], Iterable[Blueprint] | Awaitable[Iterable[Blueprint] | None]
]


class MigrationManager:
    """Manage database migrations."""

    def __init__(
        self, context: DatabaseContext, migrations_table: str = "schema_migrations"
    ):
        self.context = context
        self.migrations_table = migrations_table

    def migrations_blueprint(self) -> Blueprint:
        """Blueprint of the table that records applied versions."""
        return Blueprint(
            self.migrations_table,
            columns=[
                Column("id", ColumnType.INTEGER, auto_increment=True),
                Column("version", ColumnType.STRING),
                Column("applied_at", ColumnType.STRING, length=32),
            ],
            commands=[CreateCommand(), UniqueCommand(["version"])],
        )

    async def ensure_migrations_table(self) -> None:
        """Create migrations table if it doesn't exist."""
        if await self.context.has_table(self.migrations_table):
            return
        await self.context.run_blueprint(self.migrations_blueprint())
        logger.info(f"Created migrations table {self.migrations_table}")

    async def get_applied_migrations(self) -> list[str]:
        """Get list of applied migration versions."""
        table = self.context.schema.wrap_table(self.migrations_table)
        version = self.context.schema.wrap("version")
        result = await self.context.execute(
            f"select {version} from {table} order by {self.context.schema.wrap('id')}"
        )
        return [row["version"] for row in result.rows]

    async def apply_migration(
        self, version: str, migration_func: MigrationFunc
    ) -> None:
        """Apply a single migration.

        Args:
            version: Migration version identifier
            migration_func: Function returning the blueprints to apply; it may
                also be async and run its own statements
        """
        outcome = migration_func(self.context)
        if inspect.isawaitable(outcome):
            outcome = await outcome

        for blueprint in outcome or ():
            await self.context.run_blueprint(blueprint)

        schema = self.context.schema
        insert_sql = (
            f"insert into {schema.wrap_table(self.migrations_table)} "
            f"({schema.columnize(['version', 'applied_at'])}) "
            f"values ({schema.parameterize(range(2))})"
        )
        applied_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
        await self.context.execute(insert_sql, (version, applied_at))
        logger.info(f"Applied migration {version}")

    async def run_migrations(self, migrations: dict[str, MigrationFunc]) -> list[str]:
        """Run all pending migrations.

        Args:
            migrations: Dictionary mapping version to migration function

        Returns:
            Versions applied by this call, in order
        """
        await self.ensure_migrations_table()
        applied = await self.get_applied_migrations()

        newly_applied = []
        for version, migration_func in sorted(migrations.items()):
            if version not in applied:
                await self.apply_migration(version, migration_func)
                newly_applied.append(version)
        return newly_applied

    async def get_migration_status(
        self, migrations: dict[str, MigrationFunc]
    ) -> dict[str, bool]:
        """Get status of all known migrations.

        Args:
            migrations: Dictionary of known migrations

        Returns:
            Dictionary mapping version to applied status
        """
        await self.ensure_migrations_table()
        applied = await self.get_applied_migrations()

        return {version: version in applied for version in sorted(migrations)}
