"""Registry of supported SQL dialects."""

from dataclasses import dataclass, field

from tablecraft.database.implementations.mysql.connection import MySQLConnection
from tablecraft.database.implementations.mysql.schema_grammar import (
    MySQLSchemaGrammar,
)
from tablecraft.database.implementations.postgresql.connection import (
    PostgreSQLConnection,
)
from tablecraft.database.implementations.postgresql.schema_grammar import (
    PostgreSQLSchemaGrammar,
)
from tablecraft.database.implementations.sqlite.connection import SQLiteConnection
from tablecraft.database.implementations.sqlite.schema_grammar import (
    SQLiteSchemaGrammar,
)
from tablecraft.database.interfaces.connection import DatabaseConnection
from tablecraft.database.interfaces.schema_grammar import SchemaGrammar
from tablecraft.database.schema import ColumnType
from tablecraft.exceptions import ConfigurationError
from tablecraft.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Dialect:
    """Everything needed to talk to one kind of database."""

    name: str
    schema_grammar: type[SchemaGrammar]
    connection: type[DatabaseConnection]
    aliases: tuple[str, ...] = field(default=())

    def create_schema_grammar(self) -> SchemaGrammar:
        return self.schema_grammar()


_dialects: dict[str, Dialect] = {}
_aliases: dict[str, str] = {}


def missing_column_types(grammar_cls: type[SchemaGrammar]) -> list[ColumnType]:
    """Get the column types a schema grammar class cannot render."""
    missing = []
    for column_type in ColumnType:
        emitter = getattr(grammar_cls, f"type_{column_type.value}", None)
        if emitter is None or getattr(emitter, "__isabstractmethod__", False):
            missing.append(column_type)
    return missing


def register_dialect(dialect: Dialect) -> Dialect:
    """Register a dialect under its name and aliases.

    Raises:
        ConfigurationError: If the schema grammar does not cover every column
            type
    """
    missing = missing_column_types(dialect.schema_grammar)
    if missing:
        names = ", ".join(column_type.value for column_type in missing)
        raise ConfigurationError(
            f"Dialect {dialect.name!r} cannot render column type(s): {names}"
        )

    _dialects[dialect.name] = dialect
    for alias in (dialect.name, *dialect.aliases):
        _aliases[alias.lower()] = dialect.name

    logger.debug(f"Registered dialect {dialect.name}")
    return dialect


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name or alias.

    Raises:
        ConfigurationError: If no dialect answers to ``name``
    """
    canonical = _aliases.get(name.lower())
    if canonical is None:
        supported = ", ".join(sorted(_dialects))
        raise ConfigurationError(
            f"Unknown database client {name!r} (supported: {supported})"
        )
    return _dialects[canonical]


def available_dialects() -> list[str]:
    return sorted(_dialects)


register_dialect(
    Dialect(
        name="sqlite",
        schema_grammar=SQLiteSchemaGrammar,
        connection=SQLiteConnection,
        aliases=("sqlite3",),
    )
)
register_dialect(
    Dialect(
        name="mysql",
        schema_grammar=MySQLSchemaGrammar,
        connection=MySQLConnection,
        aliases=("mysql2", "mariadb"),
    )
)
register_dialect(
    Dialect(
        name="postgresql",
        schema_grammar=PostgreSQLSchemaGrammar,
        connection=PostgreSQLConnection,
        aliases=("postgres", "pg"),
    )
)
