"""SQLite identifier grammar."""

from tablecraft.database.interfaces.grammar import Grammar


class SQLiteGrammar(Grammar):
    """SQLite quotes identifiers with double quotes and binds with ``?``."""

    dialect = "sqlite"
    quote_char = '"'
    parameter_placeholder = "?"
