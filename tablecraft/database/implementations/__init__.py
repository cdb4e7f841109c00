"""Database implementations package."""

from .mysql import MySQLConnection, MySQLGrammar, MySQLSchemaGrammar
from .postgresql import (
    PostgreSQLConnection,
    PostgreSQLGrammar,
    PostgreSQLSchemaGrammar,
)
from .sqlite import SQLiteConnection, SQLiteGrammar, SQLiteSchemaGrammar

__all__ = [
    "MySQLConnection",
    "MySQLGrammar",
    "MySQLSchemaGrammar",
    "PostgreSQLConnection",
    "PostgreSQLGrammar",
    "PostgreSQLSchemaGrammar",
    "SQLiteConnection",
    "SQLiteGrammar",
    "SQLiteSchemaGrammar",
]
