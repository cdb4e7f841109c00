"""PostgreSQL database implementation package."""

from .connection import PostgreSQLConnection
from .grammar import PostgreSQLGrammar
from .schema_grammar import PostgreSQLSchemaGrammar

__all__ = [
    "PostgreSQLConnection",
    "PostgreSQLGrammar",
    "PostgreSQLSchemaGrammar",
]
