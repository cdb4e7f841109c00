"""Query dispatcher: runs statements on pooled, single or caller-owned connections."""

import asyncio

from tablecraft.database.interfaces.connection import DatabaseConnection
from tablecraft.database.pool import ResourcePool
from tablecraft.database.schema import QueryResult
from tablecraft.exceptions import ConfigurationError, ExecutionError, QueryTimeoutError
from tablecraft.log import get_logger, get_sql_logger
from tablecraft.types import DatabaseParamType

logger = get_logger(__name__)
sql_logger = get_sql_logger()


class QueryDispatcher:
    """Routes each statement to a connection and hands back its result.

    The dispatcher works in one of two modes, chosen at construction:

    - pool mode: every ``execute`` acquires a connection from the pool and
      releases it when the statement finishes, however it finishes.
    - single-connection mode: every ``execute`` runs on the one long-lived
      connection the dispatcher was given.

    A caller may also pass an explicit connection to ``execute``. The statement
    then runs on that connection and the pool is not touched; keeping that
    connection exclusive and closing it is up to the caller.
    """

    def __init__(
        self,
        pool: ResourcePool | None = None,
        connection: DatabaseConnection | None = None,
    ) -> None:
        if (pool is None) == (connection is None):
            raise ConfigurationError(
                "QueryDispatcher needs exactly one of a pool or a connection"
            )
        self.pool = pool
        self.connection = connection

    async def execute(
        self,
        statement: str,
        params: DatabaseParamType = None,
        connection: DatabaseConnection | None = None,
        timeout: float | None = None,
    ) -> QueryResult:
        """Execute one statement.

        Args:
            statement: SQL statement
            params: Statement parameters
            connection: Caller-owned connection to run on instead of the pool
            timeout: Seconds to wait for the statement before giving up

        Returns:
            Result of the statement

        Raises:
            PoolExhaustionError: If no pooled connection could be acquired
            ExecutionError: If the driver rejects the statement
            QueryTimeoutError: If the statement outlives ``timeout``
        """
        if connection is not None:
            return await self._run(connection, statement, params, timeout)

        if self.pool is None:
            return await self._run(self.connection, statement, params, timeout)

        pooled = await self.pool.acquire()
        try:
            return await self._run(pooled, statement, params, timeout)
        except (QueryTimeoutError, asyncio.CancelledError):
            # The driver call may still be running on its worker thread
            pooled.invalidate()
            raise
        finally:
            await self.pool.release(pooled)

    async def _run(
        self,
        connection: DatabaseConnection,
        statement: str,
        params: DatabaseParamType,
        timeout: float | None,
    ) -> QueryResult:
        sql_logger.debug(f"[{connection.connection_id}] {statement} {params or ''}")
        try:
            return await asyncio.wait_for(
                connection.query(statement, params), timeout=timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Statement on {connection.connection_id} timed out after {timeout}s"
            )
            raise QueryTimeoutError(
                f"Statement did not finish within {timeout}s"
            ) from None
        except ExecutionError as e:
            logger.error(f"Query execution failed on {connection.connection_id}: {e}")
            raise
