"""Schema compilation and query execution."""

from .context import DatabaseContext
from .dialects import Dialect, available_dialects, get_dialect, register_dialect
from .dispatcher import QueryDispatcher
from .migration import MigrationManager
from .pool import ConnectionPool, ResourcePool
from .schema import (
    AddCommand,
    Blueprint,
    Column,
    ColumnType,
    Command,
    CreateCommand,
    DropColumnCommand,
    DropIndexCommand,
    DropTableCommand,
    DropTableIfExistsCommand,
    DropUniqueCommand,
    ForeignCommand,
    IndexCommand,
    PrimaryCommand,
    QueryResult,
    RenameCommand,
    UniqueCommand,
)

__all__ = [
    "DatabaseContext",
    "Dialect",
    "available_dialects",
    "get_dialect",
    "register_dialect",
    "QueryDispatcher",
    "MigrationManager",
    "ConnectionPool",
    "ResourcePool",
    "Blueprint",
    "Column",
    "ColumnType",
    "QueryResult",
    "Command",
    "CreateCommand",
    "AddCommand",
    "RenameCommand",
    "DropTableCommand",
    "DropTableIfExistsCommand",
    "DropColumnCommand",
    "UniqueCommand",
    "IndexCommand",
    "DropUniqueCommand",
    "DropIndexCommand",
    "ForeignCommand",
    "PrimaryCommand",
]
