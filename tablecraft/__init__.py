"""tablecraft: pooled async query dispatch and multi-dialect schema compilation."""

from .config import DatabaseSettings, PoolSettings, Settings, load_settings
from .database import (
    Blueprint,
    Column,
    ColumnType,
    DatabaseContext,
    MigrationManager,
    QueryDispatcher,
    QueryResult,
    get_dialect,
)
from .exceptions import (
    ConfigurationError,
    ConnectError,
    ExecutionError,
    InvalidBlueprintError,
    PoolExhaustionError,
    QueryTimeoutError,
    TableCraftError,
    UnsupportedOperationError,
)
from .log import (
    get_logger,
    set_sql_debug,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .types import Environment

__version__ = "0.1.0"

__all__ = [
    "Blueprint",
    "Column",
    "ColumnType",
    "DatabaseContext",
    "MigrationManager",
    "QueryDispatcher",
    "QueryResult",
    "get_dialect",
    "DatabaseSettings",
    "PoolSettings",
    "Settings",
    "load_settings",
    "Environment",
    "TableCraftError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "InvalidBlueprintError",
    "ConnectError",
    "PoolExhaustionError",
    "ExecutionError",
    "QueryTimeoutError",
    "get_logger",
    "set_sql_debug",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
]
