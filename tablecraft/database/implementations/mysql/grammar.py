"""MySQL identifier grammar."""

from tablecraft.database.interfaces.grammar import Grammar


class MySQLGrammar(Grammar):
    """MySQL quotes identifiers with backticks and binds with ``%s``."""

    dialect = "mysql"
    quote_char = "`"
    parameter_placeholder = "%s"
