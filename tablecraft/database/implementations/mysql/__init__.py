"""MySQL database implementation package."""

from .connection import MySQLConnection
from .grammar import MySQLGrammar
from .schema_grammar import MySQLSchemaGrammar

__all__ = [
    "MySQLConnection",
    "MySQLGrammar",
    "MySQLSchemaGrammar",
]
