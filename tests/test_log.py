"""Unit tests for logging functionality."""

import logging

from tablecraft import get_logger, set_sql_debug, setup_logging
from tablecraft.log import SQL_LOGGER_NAME, get_sql_logger


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO


def test_setup_logging_custom_level() -> None:
    """Test setup_logging with custom level."""
    setup_logging(level=logging.DEBUG)
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"


def test_sql_debug_toggle() -> None:
    """Statement logging is switched on and off independently of the root."""
    sql_logger = get_sql_logger()
    assert sql_logger.name == SQL_LOGGER_NAME

    set_sql_debug(True)
    assert sql_logger.level == logging.DEBUG

    set_sql_debug(False)
    assert sql_logger.level == logging.NOTSET
