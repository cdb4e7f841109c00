"""SQLite-specific schema grammar."""

from tablecraft.database.interfaces.schema_grammar import (
    DialectCapabilities,
    SchemaGrammar,
)
from tablecraft.database.schema import Blueprint, Column

from .grammar import SQLiteGrammar


class SQLiteSchemaGrammar(SQLiteGrammar, SchemaGrammar):
    """SQLite schema grammar.

    SQLite cannot add primary or foreign keys to an existing table, so both are
    declared inside ``create table``. ``alter table`` adds one column at a time
    and cannot drop columns.
    """

    capabilities = DialectCapabilities(
        inline_keys=True,
        multi_column_alter=False,
        drop_column=False,
    )
    modifiers = ("nullable", "default", "increment")
    boolean_literals = ("1", "0")

    def compile_table_exists(self) -> str:
        return "select * from sqlite_master where type = 'table' and name = ?"

    def type_string(self, column: Column) -> str:
        return "varchar"

    def type_text(self, column: Column) -> str:
        return "text"

    def type_integer(self, column: Column) -> str:
        return "integer"

    def type_float(self, column: Column) -> str:
        return "float"

    def type_decimal(self, column: Column) -> str:
        return "float"

    def type_boolean(self, column: Column) -> str:
        return "tinyint"

    def type_enum(self, column: Column) -> str:
        return "varchar"

    def type_date(self, column: Column) -> str:
        return "date"

    def type_datetime(self, column: Column) -> str:
        return "datetime"

    def type_time(self, column: Column) -> str:
        return "time"

    def type_timestamp(self, column: Column) -> str:
        return "datetime"

    def type_binary(self, column: Column) -> str:
        return "blob"

    def modify_nullable(self, blueprint: Blueprint, column: Column) -> str | None:
        # An integer primary key is the rowid and is never null
        if self._is_increment(column):
            return None
        return super().modify_nullable(blueprint, column)

    def modify_increment(self, blueprint: Blueprint, column: Column) -> str | None:
        """Auto-increment integers become the table's rowid primary key."""
        if self._is_increment(column):
            return " primary key autoincrement"
        return None
