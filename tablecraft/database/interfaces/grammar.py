"""Identifier quoting rules shared by every SQL dialect."""

from abc import ABC
from collections.abc import Iterable
from typing import ClassVar


class Grammar(ABC):
    """Abstract grammar: how a dialect quotes identifiers and binds values."""

    #: Dialect name used in error messages and logs
    dialect: ClassVar[str] = ""

    #: Character that opens and closes a quoted identifier
    quote_char: ClassVar[str] = '"'

    #: Placeholder the dialect's driver expects for positional parameters
    parameter_placeholder: ClassVar[str] = "?"

    def wrap_value(self, value: str) -> str:
        """Quote a single identifier segment.

        The wildcard ``*`` passes through untouched. Quote characters inside
        the identifier are escaped by doubling them.

        Args:
            value: Identifier segment

        Returns:
            Quoted identifier
        """
        if value == "*":
            return value
        escaped = value.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"

    def wrap(self, value: str) -> str:
        """Quote a possibly dotted identifier such as ``schema.table``."""
        return ".".join(self.wrap_value(segment) for segment in value.split("."))

    def wrap_table(self, table: str) -> str:
        """Quote a table name."""
        return self.wrap(table)

    def columnize(self, columns: Iterable[str]) -> str:
        """Quote and comma-join a list of column names."""
        return ", ".join(self.wrap(column) for column in columns)

    def parameterize(self, values: Iterable[object]) -> str:
        """Get one placeholder per value, comma-joined."""
        return ", ".join(self.parameter_placeholder for _ in values)
