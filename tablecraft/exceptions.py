"""Exceptions raised by tablecraft."""

from typing import Any


class TableCraftError(Exception):
    """Base exception for tablecraft errors."""

    pass


class ConfigurationError(TableCraftError):
    """Raised when a database target is missing or misconfigured."""

    pass


class UnsupportedOperationError(TableCraftError):
    """Raised when a dialect cannot express a command or column type."""

    def __init__(
        self, operation: str, dialect: str | None = None, detail: str | None = None
    ):
        self.operation = operation
        self.dialect = dialect
        if dialect is None:
            message = f"{operation} is not supported"
        else:
            message = f"{operation} is not supported by the {dialect} dialect"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidBlueprintError(TableCraftError):
    """Raised when a blueprint cannot be compiled as given."""

    pass


class ConnectError(TableCraftError):
    """Raised when a physical connection cannot be opened."""

    pass


class PoolExhaustionError(TableCraftError):
    """Raised when a connection cannot be acquired from the pool."""

    pass


class ExecutionError(TableCraftError):
    """Raised when the driver fails to run a statement."""

    def __init__(self, message: str, driver_error: Any = None):
        super().__init__(message)
        self.driver_error = driver_error


class QueryTimeoutError(ExecutionError):
    """Raised when a statement does not finish within its timeout."""

    pass
