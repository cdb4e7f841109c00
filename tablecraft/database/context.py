"""Database context: everything bound to one configured database target."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType

from tablecraft.config import DatabaseSettings
from tablecraft.database.dialects import Dialect, get_dialect
from tablecraft.database.dispatcher import QueryDispatcher
from tablecraft.database.interfaces.connection import (
    ConnectionProvider,
    DatabaseConnection,
)
from tablecraft.database.interfaces.schema_grammar import SchemaGrammar
from tablecraft.database.pool import ConnectionPool
from tablecraft.database.schema import Blueprint, QueryResult
from tablecraft.exceptions import ConfigurationError
from tablecraft.log import get_logger, set_sql_debug
from tablecraft.types import DatabaseParamType

logger = get_logger(__name__)


class DatabaseContext:
    """Owns the dialect, pool and dispatcher of one database target.

    Several contexts can be live at the same time, each against its own
    database; nothing is shared between them.
    """

    def __init__(
        self, settings: DatabaseSettings | None = None, name: str = "default"
    ) -> None:
        """Initialize database context.

        Args:
            settings: Database target settings
            name: Label used in log messages

        Raises:
            ConfigurationError: If ``settings.client`` names no known dialect
        """
        self.settings = settings or DatabaseSettings()
        self.name = name
        self.dialect: Dialect = get_dialect(self.settings.client)
        self.schema: SchemaGrammar = self.dialect.create_schema_grammar()
        self.provider: ConnectionProvider | None = None
        self.pool: ConnectionPool | None = None
        self.connection: DatabaseConnection | None = None
        self._dispatcher: QueryDispatcher | None = None

    @property
    def is_initialized(self) -> bool:
        return self._dispatcher is not None

    async def initialize(self) -> None:
        """Open the pool, or the single connection when pooling is off.

        Does nothing when no connection settings are configured, so a context
        can be created before its target is known.
        """
        if self.is_initialized:
            return

        if not self.settings.is_configured:
            logger.warning(
                f"No connection settings for database {self.name!r}; "
                "skipping initialization"
            )
            return

        if self.settings.debug:
            set_sql_debug(True)

        self.provider = ConnectionProvider(
            self.dialect.connection, self.settings.connection or {}
        )

        if self.settings.pool is False:
            self.connection = await self.provider.open()
            self._dispatcher = QueryDispatcher(connection=self.connection)
            logger.info(f"Database {self.name!r} ready ({self.dialect.name}, single)")
            return

        pool = ConnectionPool(self.provider.open, self.settings.pool)
        await pool.start()
        self.pool = pool
        self._dispatcher = QueryDispatcher(pool=pool)
        logger.info(f"Database {self.name!r} ready ({self.dialect.name}, pooled)")

    @property
    def dispatcher(self) -> QueryDispatcher:
        """Get the dispatcher, failing if the context was never initialized."""
        self._ensure_initialized()
        return self._dispatcher

    def _ensure_initialized(self) -> None:
        if self._dispatcher is None:
            raise ConfigurationError(
                f"Database {self.name!r} is not initialized; configure its "
                "connection settings and call initialize() first"
            )

    async def execute(
        self,
        statement: str,
        params: DatabaseParamType = None,
        connection: DatabaseConnection | None = None,
        timeout: float | None = None,
    ) -> QueryResult:
        """Execute one statement through the dispatcher."""
        return await self.dispatcher.execute(
            statement, params, connection=connection, timeout=timeout
        )

    def compile(self, blueprint: Blueprint) -> list[str]:
        """Compile a blueprint for this context's dialect."""
        return self.schema.compile(blueprint)

    async def run_blueprint(
        self, blueprint: Blueprint, connection: DatabaseConnection | None = None
    ) -> list[QueryResult]:
        """Compile a blueprint and execute its statements in order.

        Args:
            blueprint: Schema change to apply
            connection: Caller-owned connection to run every statement on

        Returns:
            One result per compiled statement
        """
        statements = self.compile(blueprint)
        results = []
        for statement in statements:
            results.append(await self.execute(statement, connection=connection))
        return results

    async def has_table(
        self, table: str, connection: DatabaseConnection | None = None
    ) -> bool:
        """Check whether a table exists."""
        result = await self.execute(
            self.schema.compile_table_exists(), (table,), connection=connection
        )
        return bool(result.rows)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[DatabaseConnection]:
        """Reserve one connection for a sequence of statements.

        In pooled mode the connection is taken from the pool and returned on
        exit; otherwise the single long-lived connection is yielded.
        """
        self._ensure_initialized()
        if self.pool is None:
            yield self.connection
            return

        connection = await self.pool.acquire()
        try:
            yield connection
        finally:
            await self.pool.release(connection)

    async def close(self) -> None:
        """Close the pool or the single connection."""
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
        if self.connection is not None:
            await self.connection.end()
            self.connection = None
        if self._dispatcher is not None:
            logger.info(f"Database {self.name!r} closed")
        self._dispatcher = None

    async def __aenter__(self) -> "DatabaseContext":
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()
