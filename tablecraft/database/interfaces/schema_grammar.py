"""Abstract schema grammar: compiles blueprints into dialect-specific DDL."""

from abc import abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

from tablecraft.database.interfaces.grammar import Grammar
from tablecraft.database.schema import (
    Blueprint,
    Column,
    ColumnType,
    Command,
    DropColumnCommand,
    DropIndexCommand,
    DropUniqueCommand,
    ForeignCommand,
    IndexCommand,
    PrimaryCommand,
    RenameCommand,
    UniqueCommand,
)
from tablecraft.exceptions import InvalidBlueprintError, UnsupportedOperationError
from tablecraft.log import get_logger

logger = get_logger(__name__)

# Command tag -> compiler method
COMMAND_COMPILERS: dict[str, str] = {
    "create": "compile_create_table",
    "add": "compile_add",
    "rename": "compile_rename",
    "dropTable": "compile_drop_table",
    "dropTableIfExists": "compile_drop_table_if_exists",
    "dropColumn": "compile_drop_column",
    "unique": "compile_unique",
    "index": "compile_index",
    "dropUnique": "compile_drop_unique",
    "dropIndex": "compile_drop_index",
    "foreign": "compile_foreign",
    "primary": "compile_primary",
}


@dataclass(frozen=True)
class DialectCapabilities:
    """What a dialect's DDL can express.

    Attributes:
        inline_keys: Foreign and primary keys can only be declared inside
            ``create table``; the standalone key commands compile to nothing.
        multi_column_alter: One ``alter table`` may add several columns.
        drop_column: ``alter table ... drop column`` exists.
        increment_implies_primary: An auto-increment integer column is
            declared as the primary key, so no other primary key may exist.
    """

    inline_keys: bool = False
    multi_column_alter: bool = True
    drop_column: bool = True
    increment_implies_primary: bool = True


class SchemaGrammar(Grammar):
    """Stateless translation from a blueprint to ordered SQL statements."""

    capabilities: ClassVar[DialectCapabilities] = DialectCapabilities()

    #: Modifier emitters applied after the column type, in this order
    modifiers: ClassVar[tuple[str, ...]] = ("nullable", "default", "increment")

    #: Literals used when a boolean default is rendered (true, false)
    boolean_literals: ClassVar[tuple[str, str]] = ("1", "0")

    #: Clause that introduces each column in ``alter table ... add``
    add_column_clause: ClassVar[str] = "add column"

    #: Clause that introduces each column in ``alter table ... drop``
    drop_column_clause: ClassVar[str] = "drop column"

    def compile(self, blueprint: Blueprint) -> list[str]:
        """Compile every command of a blueprint, in the order supplied.

        The blueprint is validated as a whole before any command is compiled,
        so an invalid blueprint never yields a partial statement list.

        Args:
            blueprint: Table description with its commands

        Returns:
            SQL statements to execute in order

        Raises:
            InvalidBlueprintError: If the blueprint is inconsistent
            UnsupportedOperationError: If a command cannot be expressed
        """
        self.validate(blueprint)

        statements: list[str] = []
        for command in blueprint.commands:
            compiled = self._compiler_for(command)(blueprint, command)
            if compiled is None:
                continue
            if isinstance(compiled, str):
                statements.append(compiled)
            else:
                statements.extend(compiled)

        logger.debug(
            f"Compiled {len(blueprint.commands)} command(s) on {blueprint.table} "
            f"into {len(statements)} {self.dialect} statement(s)"
        )
        return statements

    def validate(self, blueprint: Blueprint) -> None:
        """Reject blueprints that cannot produce valid SQL."""
        primaries = blueprint.commands_named("primary")
        if len(primaries) > 1:
            raise InvalidBlueprintError(
                f"Table {blueprint.table!r} has {len(primaries)} primary key "
                "commands; at most one is allowed"
            )

        if primaries and self.capabilities.increment_implies_primary:
            for column in blueprint.columns:
                if self._is_increment(column):
                    raise InvalidBlueprintError(
                        f"Column {column.name!r} on {blueprint.table!r} is an "
                        "auto-increment primary key; it cannot be combined with "
                        f"a primary key command on {self.dialect}"
                    )

        needs_columns = [
            command.name
            for command in blueprint.commands
            if command.name in ("create", "add")
        ]
        if needs_columns and not blueprint.columns:
            raise InvalidBlueprintError(
                f"{needs_columns[0]} on table {blueprint.table!r} has no columns"
            )

        for command in blueprint.commands:
            self._compiler_for(command)

    @staticmethod
    def _is_increment(column: Column) -> bool:
        return column.type == ColumnType.INTEGER and column.auto_increment

    def _compiler_for(self, command: Command) -> Any:
        method_name = COMMAND_COMPILERS.get(command.name)
        if method_name is None:
            raise UnsupportedOperationError(
                command.name or type(command).__name__, self.dialect
            )
        return getattr(self, method_name)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def compile_create_table(self, blueprint: Blueprint, command: Command) -> str:
        """Compile a create table command."""
        columns = ", ".join(self.get_columns(blueprint))
        sql = f"create table {self.wrap_table(blueprint.table)} ({columns}"

        # Keys that cannot be added later have to be declared here, after the
        # columns: foreign keys first, then the primary key.
        if self.capabilities.inline_keys:
            sql += self.add_foreign_keys(blueprint)
            sql += self.add_primary_keys(blueprint)

        return sql + ")"

    def add_foreign_keys(self, blueprint: Blueprint) -> str:
        """Get the inline foreign key clauses for a create table statement."""
        sql = ""
        foreigns = [c for c in blueprint.commands if isinstance(c, ForeignCommand)]
        for foreign in foreigns:
            columns = self.columnize(foreign.columns)
            on = self.wrap_table(foreign.on)
            references = self.columnize(foreign.references)
            sql += f", foreign key({columns}) references {on}({references})"
            sql += self.foreign_key_actions(foreign)
        return sql

    def add_primary_keys(self, blueprint: Blueprint) -> str:
        """Get the inline primary key clause for a create table statement."""
        primaries = [c for c in blueprint.commands if isinstance(c, PrimaryCommand)]
        if not primaries:
            return ""
        primary = primaries[0]
        return f", primary key ({self.columnize(primary.columns)})"

    def compile_add(self, blueprint: Blueprint, command: Command) -> list[str]:
        """Compile alter table statements adding the blueprint's columns."""
        table = self.wrap_table(blueprint.table)
        columns = self.get_columns(blueprint)

        if self.capabilities.multi_column_alter:
            clauses = ", ".join(
                f"{self.add_column_clause} {column}" for column in columns
            )
            return [f"alter table {table} {clauses}"]

        return [f"alter table {table} add column {column}" for column in columns]

    def compile_rename(self, blueprint: Blueprint, command: RenameCommand) -> str:
        """Compile a rename table command."""
        table = self.wrap_table(blueprint.table)
        return f"alter table {table} rename to {self.wrap_table(command.to)}"

    def compile_drop_table(self, blueprint: Blueprint, command: Command) -> str:
        """Compile a drop table command."""
        return f"drop table {self.wrap_table(blueprint.table)}"

    def compile_drop_table_if_exists(
        self, blueprint: Blueprint, command: Command
    ) -> str:
        """Compile a drop table (if exists) command."""
        return f"drop table if exists {self.wrap_table(blueprint.table)}"

    def compile_drop_column(
        self, blueprint: Blueprint, command: DropColumnCommand
    ) -> str:
        """Compile a drop column command."""
        if not self.capabilities.drop_column:
            raise UnsupportedOperationError(command.name, self.dialect)

        table = self.wrap_table(blueprint.table)
        clauses = ", ".join(
            f"{self.drop_column_clause} {self.wrap(column)}"
            for column in command.columns
        )
        return f"alter table {table} {clauses}"

    def compile_unique(self, blueprint: Blueprint, command: UniqueCommand) -> str:
        """Compile a unique key command."""
        index = self.index_name(blueprint, command, "unique")
        table = self.wrap_table(blueprint.table)
        columns = self.columnize(command.columns)
        return f"create unique index {index} on {table} ({columns})"

    def compile_index(self, blueprint: Blueprint, command: IndexCommand) -> str:
        """Compile a plain index command."""
        index = self.index_name(blueprint, command, "index")
        table = self.wrap_table(blueprint.table)
        columns = self.columnize(command.columns)
        return f"create index {index} on {table} ({columns})"

    def compile_drop_unique(
        self, blueprint: Blueprint, command: DropUniqueCommand
    ) -> str:
        """Compile a drop unique key command."""
        return f"drop index {command.index}"

    def compile_drop_index(
        self, blueprint: Blueprint, command: DropIndexCommand
    ) -> str:
        """Compile a drop index command."""
        return f"drop index {command.index}"

    def compile_foreign(
        self, blueprint: Blueprint, command: ForeignCommand
    ) -> str | None:
        """Compile a foreign key command.

        Returns None on dialects that declare keys inside create table.
        """
        if self.capabilities.inline_keys:
            return None

        table = self.wrap_table(blueprint.table)
        index = self.index_name(blueprint, command, "foreign")
        columns = self.columnize(command.columns)
        on = self.wrap_table(command.on)
        references = self.columnize(command.references)
        sql = (
            f"alter table {table} add constraint {index} "
            f"foreign key ({columns}) references {on} ({references})"
        )
        return sql + self.foreign_key_actions(command)

    def compile_primary(
        self, blueprint: Blueprint, command: PrimaryCommand
    ) -> str | None:
        """Compile a primary key command.

        Returns None on dialects that declare keys inside create table.
        """
        if self.capabilities.inline_keys:
            return None

        table = self.wrap_table(blueprint.table)
        index = self.index_name(blueprint, command, "primary")
        columns = self.columnize(command.columns)
        return f"alter table {table} add constraint {index} primary key ({columns})"

    @abstractmethod
    def compile_table_exists(self) -> str:
        """Compile a query checking whether a table exists.

        The query takes the table name as its only parameter.
        """
        pass

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def get_columns(self, blueprint: Blueprint) -> list[str]:
        """Render every column of the blueprint as a column definition."""
        return [self.get_column(blueprint, column) for column in blueprint.columns]

    def get_column(self, blueprint: Blueprint, column: Column) -> str:
        """Render ``name type modifiers`` for one column."""
        sql = f"{column.name} {self.get_type(column)}"
        for modifier in self.modifiers:
            fragment = getattr(self, f"modify_{modifier}")(blueprint, column)
            if fragment:
                sql += fragment
        return sql

    def get_type(self, column: Column) -> str:
        """Get the SQL type fragment for a column."""
        return getattr(self, f"type_{column.type.value}")(column)

    def index_name(
        self,
        blueprint: Blueprint,
        command: UniqueCommand | IndexCommand | ForeignCommand | PrimaryCommand,
        kind: str,
    ) -> str:
        """Get the command's index name, or derive one from table and columns."""
        if command.index:
            return command.index
        name = "_".join([blueprint.table, *command.columns, kind])
        return name.lower().replace(".", "_").replace("-", "_")

    def foreign_key_actions(self, command: ForeignCommand) -> str:
        """Get the ``on delete`` / ``on update`` suffix of a foreign key."""
        sql = ""
        if command.on_delete:
            sql += f" on delete {command.on_delete}"
        if command.on_update:
            sql += f" on update {command.on_update}"
        return sql

    def format_default(self, value: Any) -> str:
        """Render a default value as a SQL literal.

        Booleans use the dialect's literals and numbers are left unquoted;
        everything else becomes a quoted string.
        """
        if isinstance(value, bool):
            true_literal, false_literal = self.boolean_literals
            return true_literal if value else false_literal
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        return self.quote_string(str(value))

    @staticmethod
    def quote_string(value: str) -> str:
        """Quote a string literal, doubling embedded single quotes."""
        escaped = value.replace("'", "''")
        return f"'{escaped}'"

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def modify_nullable(self, blueprint: Blueprint, column: Column) -> str | None:
        """Get the SQL for a nullable column modifier."""
        return " null" if column.nullable else " not null"

    def modify_default(self, blueprint: Blueprint, column: Column) -> str | None:
        """Get the SQL for a default column modifier."""
        if column.default_value is None:
            return None
        return f" default {self.format_default(column.default_value)}"

    def modify_increment(self, blueprint: Blueprint, column: Column) -> str | None:
        """Get the SQL for an auto-increment column modifier."""
        return None

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    @abstractmethod
    def type_string(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_text(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_integer(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_float(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_decimal(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_boolean(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_enum(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_date(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_datetime(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_time(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_timestamp(self, column: Column) -> str:
        pass

    @abstractmethod
    def type_binary(self, column: Column) -> str:
        pass
