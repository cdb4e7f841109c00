"""Database connection interface."""

import asyncio
import itertools
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, ClassVar

from tablecraft.database.schema import QueryResult
from tablecraft.exceptions import ConnectError, ExecutionError
from tablecraft.log import get_logger
from tablecraft.types import DatabaseParamType, RowType

logger = get_logger(__name__)

# Process-wide source of connection correlation ids
_connection_ids = itertools.count(1)


class DatabaseConnection(ABC):
    """Abstract database connection.

    Wraps one blocking DB-API driver connection. Driver calls run in a worker
    thread and are serialized per connection, so a connection may be shared by
    several tasks without interleaving statements.
    """

    #: Dialect name used in logs
    dialect: ClassVar[str] = ""

    #: Exception types the driver raises for connect and query failures
    driver_errors: ClassVar[tuple[type[BaseException], ...]] = ()

    def __init__(self, settings: dict[str, Any] | None = None) -> None:
        """Initialize database connection.

        Args:
            settings: Driver-specific connection settings
        """
        self.settings = dict(settings or {})
        self.connection_id = f"__cid{next(_connection_ids)}"
        self._connection: Any = None
        self._lock = asyncio.Lock()
        self._reusable = True

    @abstractmethod
    def _open_driver(self) -> Any:
        """Open and return the underlying driver connection (blocking)."""
        pass

    async def connect(self) -> None:
        """Establish the database connection.

        Raises:
            ConnectError: If the driver cannot open a session
        """
        if self._connection is not None:
            return

        try:
            self._connection = await asyncio.to_thread(self._open_driver)
        except self.driver_errors as e:
            logger.error(f"Failed to open {self.connection_id}: {e}")
            raise ConnectError(
                f"Could not connect to {self.dialect} database: {e}"
            ) from e

        logger.info(f"Opened {self.dialect} connection {self.connection_id}")

    async def query(
        self, statement: str, params: DatabaseParamType = None
    ) -> QueryResult:
        """Run one statement and commit it.

        Args:
            statement: SQL statement
            params: Statement parameters

        Returns:
            Rows produced by the statement plus driver bookkeeping

        Raises:
            ExecutionError: If the driver rejects the statement
        """
        if self._connection is None:
            raise ExecutionError(f"Connection {self.connection_id} is not open")

        async with self._lock:
            worker = asyncio.ensure_future(
                asyncio.to_thread(self._run, statement, params)
            )
            try:
                return await asyncio.shield(worker)
            except asyncio.CancelledError:
                # The driver call cannot be interrupted; hold the lock until it returns
                await self._wait_for_worker(worker)
                raise
            except self.driver_errors as e:
                raise ExecutionError(str(e), driver_error=e) from e

    async def _wait_for_worker(self, worker: "asyncio.Future[QueryResult]") -> None:
        while not worker.done():
            try:
                await asyncio.wait({worker})
            except asyncio.CancelledError:
                continue
        if not worker.cancelled() and worker.exception() is not None:
            logger.warning(
                f"Abandoned statement on {self.connection_id} failed: "
                f"{worker.exception()}"
            )

    def _run(self, statement: str, params: DatabaseParamType) -> QueryResult:
        cursor = self._connection.cursor()
        try:
            if params is not None:
                cursor.execute(statement, params)
            else:
                cursor.execute(statement)
            rows = self._fetch_rows(cursor)
            self._connection.commit()
            return QueryResult(
                rows=rows,
                rowcount=cursor.rowcount,
                lastrowid=getattr(cursor, "lastrowid", None),
                connection_id=self.connection_id,
            )
        except self.driver_errors:
            self._connection.rollback()
            raise
        finally:
            cursor.close()

    @staticmethod
    def _fetch_rows(cursor: Any) -> list[RowType]:
        """Convert a cursor's result set to dictionaries."""
        description = cursor.description
        if not description:
            return []
        names = [column[0] for column in description]
        return [dict(zip(names, row, strict=True)) for row in cursor.fetchall()]

    async def end(self) -> None:
        """Close the database connection."""
        if self._connection is None:
            return

        connection, self._connection = self._connection, None
        try:
            await asyncio.to_thread(connection.close)
        except self.driver_errors as e:
            logger.warning(f"Error closing connection {self.connection_id}: {e}")
        logger.info(f"Closed {self.dialect} connection {self.connection_id}")

    def invalidate(self) -> None:
        """Mark the connection as unsafe to hand out again."""
        self._reusable = False

    @property
    def reusable(self) -> bool:
        """Check if the connection can go back to a pool."""
        return self._reusable and self._connection is not None

    @property
    def is_connected(self) -> bool:
        """Check if connection is active."""
        return self._connection is not None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.connection_id}>"

    async def __aenter__(self) -> "DatabaseConnection":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await self.end()


class ConnectionProvider:
    """Opens fresh connections of one class against one endpoint."""

    def __init__(
        self, connection_cls: type[DatabaseConnection], settings: dict[str, Any]
    ) -> None:
        self.connection_cls = connection_cls
        self.settings = settings

    async def open(self) -> DatabaseConnection:
        """Create and connect a new connection. Failures are not retried."""
        connection = self.connection_cls(self.settings)
        await connection.connect()
        return connection
