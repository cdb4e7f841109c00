"""MySQL database connection implementation."""

from typing import Any

import pymysql

from tablecraft.database.interfaces.connection import DatabaseConnection


class MySQLConnection(DatabaseConnection):
    """MySQL connection backed by PyMySQL.

    Settings are passed to ``pymysql.connect`` as keyword arguments
    (``host``, ``port``, ``user``, ``password``, ``database``, ...).
    """

    dialect = "mysql"
    driver_errors = (pymysql.MySQLError,)

    def _open_driver(self) -> Any:
        settings = dict(self.settings)
        if "port" in settings:
            settings["port"] = int(settings["port"])
        settings.setdefault("charset", "utf8mb4")
        return pymysql.connect(**settings)
