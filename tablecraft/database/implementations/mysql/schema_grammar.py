"""MySQL-specific schema grammar."""

from tablecraft.database.interfaces.schema_grammar import (
    DialectCapabilities,
    SchemaGrammar,
)
from tablecraft.database.schema import (
    Blueprint,
    Column,
    DropIndexCommand,
    DropUniqueCommand,
    IndexCommand,
    RenameCommand,
    UniqueCommand,
)

from .grammar import MySQLGrammar


class MySQLSchemaGrammar(MySQLGrammar, SchemaGrammar):
    """MySQL schema grammar.

    Keys are added with ``alter table`` after the table exists, and a single
    ``alter table`` can add or drop several columns.
    """

    capabilities = DialectCapabilities(
        inline_keys=False,
        multi_column_alter=True,
        drop_column=True,
    )
    modifiers = ("unsigned", "nullable", "default", "increment")
    boolean_literals = ("1", "0")
    add_column_clause = "add"
    drop_column_clause = "drop"

    def compile_table_exists(self) -> str:
        return (
            "select * from information_schema.tables "
            "where table_schema = database() and table_name = %s"
        )

    def compile_rename(self, blueprint: Blueprint, command: RenameCommand) -> str:
        table = self.wrap_table(blueprint.table)
        return f"rename table {table} to {self.wrap_table(command.to)}"

    def compile_unique(self, blueprint: Blueprint, command: UniqueCommand) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.index_name(blueprint, command, "unique")
        columns = self.columnize(command.columns)
        return f"alter table {table} add unique {index}({columns})"

    def compile_index(self, blueprint: Blueprint, command: IndexCommand) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.index_name(blueprint, command, "index")
        columns = self.columnize(command.columns)
        return f"alter table {table} add index {index}({columns})"

    def compile_drop_unique(
        self, blueprint: Blueprint, command: DropUniqueCommand
    ) -> str:
        table = self.wrap_table(blueprint.table)
        return f"alter table {table} drop index {command.index}"

    def compile_drop_index(
        self, blueprint: Blueprint, command: DropIndexCommand
    ) -> str:
        table = self.wrap_table(blueprint.table)
        return f"alter table {table} drop index {command.index}"

    def type_string(self, column: Column) -> str:
        return f"varchar({column.length})"

    def type_text(self, column: Column) -> str:
        return "text"

    def type_integer(self, column: Column) -> str:
        return "int"

    def type_float(self, column: Column) -> str:
        return "float"

    def type_decimal(self, column: Column) -> str:
        return f"decimal({column.precision}, {column.scale})"

    def type_boolean(self, column: Column) -> str:
        return "tinyint(1)"

    def type_enum(self, column: Column) -> str:
        if not column.allowed:
            return f"varchar({column.length})"
        members = ", ".join(self.quote_string(member) for member in column.allowed)
        return f"enum({members})"

    def type_date(self, column: Column) -> str:
        return "date"

    def type_datetime(self, column: Column) -> str:
        return "datetime"

    def type_time(self, column: Column) -> str:
        return "time"

    def type_timestamp(self, column: Column) -> str:
        return "timestamp"

    def type_binary(self, column: Column) -> str:
        return "blob"

    def modify_unsigned(self, blueprint: Blueprint, column: Column) -> str | None:
        """Get the SQL for an unsigned column modifier."""
        if column.unsigned or self._is_increment(column):
            return " unsigned"
        return None

    def modify_increment(self, blueprint: Blueprint, column: Column) -> str | None:
        if self._is_increment(column):
            return " auto_increment primary key"
        return None
