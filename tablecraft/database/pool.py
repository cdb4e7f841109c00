"""Bounded asyncio connection pool."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from tablecraft.config import PoolSettings
from tablecraft.database.interfaces.connection import DatabaseConnection
from tablecraft.exceptions import ConnectError, PoolExhaustionError
from tablecraft.log import get_logger

logger = get_logger(__name__)

ConnectionFactory = Callable[[], Awaitable[DatabaseConnection]]


class ResourcePool(Protocol):
    """What the dispatcher needs from a pool."""

    async def acquire(self) -> DatabaseConnection: ...

    async def release(self, connection: DatabaseConnection) -> None: ...


@dataclass
class _PoolEntry:
    connection: DatabaseConnection
    idle_since: float  # time.monotonic() when the connection was returned


class ConnectionPool:
    """Pool of connections opened on demand by ``factory``.

    At most ``max`` connections exist at once. ``start()`` opens ``min``
    connections up front, and a background task closes connections that stay
    idle longer than ``idle_timeout_millis`` while more than ``min`` are open.
    Setting ``idle_timeout_millis`` to 0 disables idle eviction.
    """

    def __init__(
        self, factory: ConnectionFactory, settings: PoolSettings | None = None
    ) -> None:
        """Initialize connection pool.

        Args:
            factory: Coroutine function returning a new, connected connection
            settings: Pool limits
        """
        self._factory = factory
        self.settings = settings or PoolSettings()
        self._idle: list[_PoolEntry] = []
        self._in_use: set[DatabaseConnection] = set()
        self._slots = asyncio.Semaphore(self.settings.max)
        self._stop_event = asyncio.Event()
        self._reaper: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def size(self) -> int:
        """Number of open connections, idle or in use."""
        return len(self._idle) + len(self._in_use)

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Open the minimum number of connections and start idle eviction."""
        if self._closed:
            raise PoolExhaustionError("Cannot start a closed pool")

        try:
            while self.size < self.settings.min:
                connection = await self._factory()
                self._idle.append(_PoolEntry(connection, time.monotonic()))
        except BaseException:
            logger.error(
                f"Pool warm-up failed after {self.size} connection(s); closing them"
            )
            await self._end_idle()
            raise

        if self._reaper is None and self.settings.idle_timeout_millis > 0:
            self._reaper = asyncio.create_task(self._reap_loop())

        logger.info(
            f"Connection pool started with {self.size} connection(s) "
            f"(min={self.settings.min}, max={self.settings.max})"
        )

    async def acquire(self) -> DatabaseConnection:
        """Get a connection, waiting for one to be released if necessary.

        Returns:
            An open connection reserved for the caller

        Raises:
            PoolExhaustionError: If the pool is closed, the wait times out or a
                new connection cannot be opened
        """
        if self._closed:
            raise PoolExhaustionError("Connection pool is closed")

        timeout = self.settings.acquire_timeout_seconds
        try:
            await asyncio.wait_for(self._slots.acquire(), timeout=timeout)
        except asyncio.TimeoutError:
            raise PoolExhaustionError(
                f"No connection available after {timeout}s "
                f"({self.settings.max} in use)"
            ) from None

        try:
            connection = await self._checkout()
        except BaseException:
            self._slots.release()
            raise

        self._in_use.add(connection)
        return connection

    async def _checkout(self) -> DatabaseConnection:
        if self._closed:
            raise PoolExhaustionError("Connection pool is closed")

        # Most recently used first, so spare connections age out
        if self._idle:
            return self._idle.pop().connection

        try:
            connection = await self._factory()
        except ConnectError as e:
            raise PoolExhaustionError(f"Could not open a pooled connection: {e}") from e

        logger.debug(f"Pool grew to {self.size + 1} connection(s)")
        return connection

    async def release(self, connection: DatabaseConnection) -> None:
        """Return a connection to the pool.

        Connections that were invalidated, or that come back after the pool
        closed, are ended instead of being kept.
        """
        if connection not in self._in_use:
            logger.warning(f"Ignoring release of unknown connection {connection}")
            return

        self._in_use.discard(connection)
        try:
            if self._closed or not connection.reusable:
                logger.debug(f"Destroying connection {connection.connection_id}")
                await connection.end()
            else:
                self._idle.append(_PoolEntry(connection, time.monotonic()))
        finally:
            self._slots.release()

    async def evict_idle(self) -> int:
        """Close connections idle past the timeout, keeping ``min`` open.

        Returns:
            Number of connections closed
        """
        timeout = self.settings.idle_timeout_seconds
        if timeout <= 0:
            return 0

        now = time.monotonic()
        evicted: list[_PoolEntry] = []
        # Oldest entries sit at the front
        for entry in list(self._idle):
            if self.size <= self.settings.min:
                break
            if now - entry.idle_since >= timeout:
                self._idle.remove(entry)
                evicted.append(entry)

        for entry in evicted:
            await entry.connection.end()

        if evicted:
            logger.debug(f"Evicted {len(evicted)} idle connection(s)")
        return len(evicted)

    async def _reap_loop(self) -> None:
        """Background loop for idle eviction."""
        interval = self.settings.idle_timeout_seconds / 2
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                await self.evict_idle()

    async def close(self) -> None:
        """Close idle connections and stop handing out new ones.

        Connections still in use are ended when they are released.
        """
        if self._closed:
            return

        self._closed = True
        self._stop_event.set()
        if self._reaper is not None:
            await self._reaper
            self._reaper = None

        await self._end_idle()
        logger.info(f"Connection pool closed ({len(self._in_use)} still in use)")

    async def _end_idle(self) -> None:
        idle, self._idle = self._idle, []
        for entry in idle:
            await entry.connection.end()

    def stats(self) -> dict[str, Any]:
        """Return pool statistics for monitoring."""
        return {
            "size": self.size,
            "idle": len(self._idle),
            "in_use": len(self._in_use),
            "min": self.settings.min,
            "max": self.settings.max,
            "closed": self._closed,
        }
