"""PostgreSQL database connection implementation."""

from typing import Any

import psycopg

from tablecraft.database.interfaces.connection import DatabaseConnection


class PostgreSQLConnection(DatabaseConnection):
    """PostgreSQL connection backed by psycopg.

    Settings are passed to ``psycopg.connect``; ``database`` is accepted as an
    alias of ``dbname``.
    """

    dialect = "postgresql"
    driver_errors = (psycopg.Error,)

    def _open_driver(self) -> Any:
        settings = dict(self.settings)
        if "database" in settings:
            settings.setdefault("dbname", settings.pop("database"))
        if "port" in settings:
            settings["port"] = int(settings["port"])
        return psycopg.connect(**settings)
