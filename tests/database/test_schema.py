"""Tests for blueprint, column and command definitions."""

import pytest

from tablecraft.database.schema import (
    Blueprint,
    Column,
    ColumnType,
    CreateCommand,
    ForeignCommand,
    IndexCommand,
    QueryResult,
    UniqueCommand,
)
from tablecraft.exceptions import UnsupportedOperationError


def test_column_type_coerced_from_string() -> None:
    column = Column("name", "string")

    assert column.type is ColumnType.STRING
    assert column.nullable is False
    assert column.auto_increment is False


def test_unknown_column_type_names_the_type() -> None:
    with pytest.raises(UnsupportedOperationError) as exc_info:
        Column("shape", "geometry")

    assert "geometry" in str(exc_info.value)
    assert "shape" in str(exc_info.value)


def test_enum_members_frozen() -> None:
    column = Column("status", ColumnType.ENUM, allowed=["draft", "live"])

    assert column.allowed == ("draft", "live")


def test_command_columns_accept_single_name() -> None:
    assert UniqueCommand("email").columns == ("email",)
    assert IndexCommand(["a", "b"]).columns == ("a", "b")

    foreign = ForeignCommand("user_id", on="users", references="id")
    assert foreign.columns == ("user_id",)
    assert foreign.references == ("id",)


def test_command_tags() -> None:
    assert CreateCommand.name == "create"
    assert UniqueCommand("email").name == "unique"


def test_blueprint_freezes_sequences() -> None:
    blueprint = Blueprint(
        "users",
        columns=[Column("id", ColumnType.INTEGER)],
        commands=[CreateCommand(), UniqueCommand("id"), UniqueCommand("name")],
    )

    assert isinstance(blueprint.columns, tuple)
    assert isinstance(blueprint.commands, tuple)
    assert len(blueprint.commands_named("unique")) == 2
    assert blueprint.command_named("create") == CreateCommand()
    assert blueprint.command_named("primary") is None


def test_query_result_first_row() -> None:
    assert QueryResult().first() is None
    assert QueryResult(rows=[{"id": 1}, {"id": 2}]).first() == {"id": 1}
