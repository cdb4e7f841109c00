"""PostgreSQL identifier grammar."""

from tablecraft.database.interfaces.grammar import Grammar


class PostgreSQLGrammar(Grammar):
    """PostgreSQL quotes identifiers with double quotes and binds with ``%s``."""

    dialect = "postgresql"
    quote_char = '"'
    parameter_placeholder = "%s"
