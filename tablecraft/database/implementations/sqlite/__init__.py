"""SQLite database implementation package."""

from .connection import SQLiteConnection
from .grammar import SQLiteGrammar
from .schema_grammar import SQLiteSchemaGrammar

__all__ = [
    "SQLiteConnection",
    "SQLiteGrammar",
    "SQLiteSchemaGrammar",
]
