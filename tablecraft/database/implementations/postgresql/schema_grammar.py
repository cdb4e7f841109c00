"""PostgreSQL-specific schema grammar."""

from tablecraft.database.interfaces.schema_grammar import (
    DialectCapabilities,
    SchemaGrammar,
)
from tablecraft.database.schema import (
    Blueprint,
    Column,
    DropUniqueCommand,
    UniqueCommand,
)

from .grammar import PostgreSQLGrammar


class PostgreSQLSchemaGrammar(PostgreSQLGrammar, SchemaGrammar):
    """PostgreSQL schema grammar. Auto-increment integers become ``serial``."""

    capabilities = DialectCapabilities(
        inline_keys=False,
        multi_column_alter=True,
        drop_column=True,
    )
    modifiers = ("nullable", "default", "increment")
    boolean_literals = ("true", "false")

    def compile_table_exists(self) -> str:
        return (
            "select * from information_schema.tables "
            "where table_schema = current_schema() and table_name = %s"
        )

    def compile_unique(self, blueprint: Blueprint, command: UniqueCommand) -> str:
        table = self.wrap_table(blueprint.table)
        index = self.index_name(blueprint, command, "unique")
        columns = self.columnize(command.columns)
        return f"alter table {table} add constraint {index} unique ({columns})"

    def compile_drop_unique(
        self, blueprint: Blueprint, command: DropUniqueCommand
    ) -> str:
        table = self.wrap_table(blueprint.table)
        return f"alter table {table} drop constraint {command.index}"

    def type_string(self, column: Column) -> str:
        return f"varchar({column.length})"

    def type_text(self, column: Column) -> str:
        return "text"

    def type_integer(self, column: Column) -> str:
        return "serial" if column.auto_increment else "integer"

    def type_float(self, column: Column) -> str:
        return "real"

    def type_decimal(self, column: Column) -> str:
        return f"decimal({column.precision}, {column.scale})"

    def type_boolean(self, column: Column) -> str:
        return "boolean"

    def type_enum(self, column: Column) -> str:
        if not column.allowed:
            return "text"
        members = ", ".join(self.quote_string(member) for member in column.allowed)
        return f"text check ({self.wrap(column.name)} in ({members}))"

    def type_date(self, column: Column) -> str:
        return "date"

    def type_datetime(self, column: Column) -> str:
        return "timestamp"

    def type_time(self, column: Column) -> str:
        return "time"

    def type_timestamp(self, column: Column) -> str:
        return "timestamp"

    def type_binary(self, column: Column) -> str:
        return "bytea"

    def modify_increment(self, blueprint: Blueprint, column: Column) -> str | None:
        if self._is_increment(column):
            return " primary key"
        return None
