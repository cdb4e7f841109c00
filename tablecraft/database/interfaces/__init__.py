"""Database interfaces module."""

from .connection import ConnectionProvider, DatabaseConnection
from .grammar import Grammar
from .schema_grammar import DialectCapabilities, SchemaGrammar

__all__ = [
    "ConnectionProvider",
    "DatabaseConnection",
    "Grammar",
    "SchemaGrammar",
    "DialectCapabilities",
]
