"""SQLite database connection implementation."""

import sqlite3
from pathlib import Path
from typing import Any

from tablecraft.database.interfaces.connection import DatabaseConnection
from tablecraft.exceptions import ConfigurationError


class SQLiteConnection(DatabaseConnection):
    """SQLite connection backed by the standard library driver.

    Settings:
        filename: Database file path, or ``:memory:``
        timeout: Seconds to wait on a locked database (default 60)
    """

    dialect = "sqlite"
    driver_errors = (sqlite3.Error,)

    def _open_driver(self) -> sqlite3.Connection:
        filename = self.settings.get("filename") or self.settings.get("database")
        if not filename:
            raise ConfigurationError("sqlite connection settings need a filename")

        if filename != ":memory:":
            Path(filename).parent.mkdir(parents=True, exist_ok=True)

        timeout = float(self.settings.get("timeout", 60.0))
        # Statements run on worker threads, never concurrently
        connection = sqlite3.connect(
            filename, check_same_thread=False, timeout=timeout
        )
        self._configure_connection(connection, timeout)
        return connection

    @staticmethod
    def _configure_connection(connection: Any, timeout: float) -> None:
        """Configure SQLite connection settings."""
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute(f"PRAGMA busy_timeout = {int(timeout * 1000)}")
