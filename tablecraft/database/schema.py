"""Blueprint, column and command definitions consumed by schema grammars."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from tablecraft.exceptions import UnsupportedOperationError
from tablecraft.types import RowType


class ColumnType(str, Enum):
    """Column types every schema grammar must be able to render."""

    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    ENUM = "enum"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    TIMESTAMP = "timestamp"
    BINARY = "binary"


@dataclass(frozen=True)
class Column:
    """Database column definition."""

    name: str
    type: ColumnType
    nullable: bool = False
    default_value: Any = None
    auto_increment: bool = False
    length: int = 255
    precision: int = 8
    scale: int = 2
    allowed: tuple[str, ...] = ()
    unsigned: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.type, ColumnType):
            try:
                column_type = ColumnType(self.type)
            except ValueError:
                raise UnsupportedOperationError(
                    f"column type {self.type!r}", detail=f"column {self.name!r}"
                ) from None
            object.__setattr__(self, "type", column_type)
        object.__setattr__(self, "allowed", tuple(self.allowed))


@dataclass(frozen=True)
class Command:
    """A single schema operation within a blueprint."""

    name: ClassVar[str] = ""


@dataclass(frozen=True)
class CreateCommand(Command):
    name: ClassVar[str] = "create"


@dataclass(frozen=True)
class AddCommand(Command):
    name: ClassVar[str] = "add"


@dataclass(frozen=True)
class RenameCommand(Command):
    name: ClassVar[str] = "rename"

    to: str


@dataclass(frozen=True)
class DropTableCommand(Command):
    name: ClassVar[str] = "dropTable"


@dataclass(frozen=True)
class DropTableIfExistsCommand(Command):
    name: ClassVar[str] = "dropTableIfExists"


@dataclass(frozen=True)
class DropColumnCommand(Command):
    name: ClassVar[str] = "dropColumn"

    columns: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _as_tuple(self.columns))


@dataclass(frozen=True)
class UniqueCommand(Command):
    name: ClassVar[str] = "unique"

    columns: tuple[str, ...]
    index: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _as_tuple(self.columns))


@dataclass(frozen=True)
class IndexCommand(Command):
    name: ClassVar[str] = "index"

    columns: tuple[str, ...]
    index: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _as_tuple(self.columns))


@dataclass(frozen=True)
class DropUniqueCommand(Command):
    name: ClassVar[str] = "dropUnique"

    index: str


@dataclass(frozen=True)
class DropIndexCommand(Command):
    name: ClassVar[str] = "dropIndex"

    index: str


@dataclass(frozen=True)
class ForeignCommand(Command):
    """Foreign key from ``columns`` to ``references`` on table ``on``."""

    name: ClassVar[str] = "foreign"

    columns: tuple[str, ...]
    on: str
    references: tuple[str, ...]
    index: str | None = None
    on_delete: str | None = None
    on_update: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _as_tuple(self.columns))
        object.__setattr__(self, "references", _as_tuple(self.references))


@dataclass(frozen=True)
class PrimaryCommand(Command):
    name: ClassVar[str] = "primary"

    columns: tuple[str, ...]
    index: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", _as_tuple(self.columns))


@dataclass(frozen=True)
class Blueprint:
    """Desired schema of one table: its columns and the commands to run."""

    table: str
    columns: Sequence[Column] = field(default_factory=tuple)
    commands: Sequence[Command] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "commands", tuple(self.commands))

    def commands_named(self, name: str) -> list[Command]:
        """Get every command with the given tag, in blueprint order."""
        return [command for command in self.commands if command.name == name]

    def command_named(self, name: str) -> Command | None:
        """Get the first command with the given tag, if any."""
        commands = self.commands_named(name)
        return commands[0] if commands else None


def _as_tuple(value: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass
class QueryResult:
    """Outcome of one executed statement."""

    rows: list[RowType] = field(default_factory=list)
    rowcount: int = -1
    lastrowid: int | None = None
    connection_id: str | None = None

    def first(self) -> RowType | None:
        """Get the first row, if any."""
        return self.rows[0] if self.rows else None
