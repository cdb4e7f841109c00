"""Integration tests for the database context on SQLite."""

from pathlib import Path

import pytest
import pytest_asyncio

from tablecraft.config import DatabaseSettings
from tablecraft.database.context import DatabaseContext
from tablecraft.database.schema import (
    AddCommand,
    Blueprint,
    Column,
    ColumnType,
    CreateCommand,
    DropColumnCommand,
    ForeignCommand,
)
from tablecraft.exceptions import (
    ConfigurationError,
    ExecutionError,
    UnsupportedOperationError,
)


@pytest_asyncio.fixture
async def context(sqlite_settings: DatabaseSettings) -> DatabaseContext:
    """Create an initialized, pooled SQLite context."""
    context = DatabaseContext(sqlite_settings)
    async with context:
        yield context


@pytest.mark.asyncio
async def test_initialize_without_connection_settings_is_noop() -> None:
    context = DatabaseContext(DatabaseSettings())

    await context.initialize()

    assert context.is_initialized is False
    with pytest.raises(ConfigurationError, match="not initialized"):
        await context.execute("select 1")


def test_unknown_client_rejected() -> None:
    with pytest.raises(ConfigurationError):
        DatabaseContext(DatabaseSettings(client="oracle"))


def test_compile_needs_no_connection(users_blueprint: Blueprint) -> None:
    context = DatabaseContext(DatabaseSettings(client="postgres"))

    assert context.compile(users_blueprint)[0].startswith('create table "users"')


@pytest.mark.asyncio
async def test_pool_warmed_to_min(context: DatabaseContext) -> None:
    assert context.is_initialized is True
    assert context.pool is not None
    assert context.pool.stats()["size"] == 2


@pytest.mark.asyncio
async def test_run_blueprint_creates_table(
    context: DatabaseContext, users_blueprint: Blueprint
) -> None:
    assert await context.has_table("users") is False

    results = await context.run_blueprint(users_blueprint)

    assert len(results) == 1
    assert await context.has_table("users") is True

    await context.execute(
        "insert into users (name, age) values (?, ?)", ("Ada", 36)
    )
    await context.execute("insert into users (name) values (?)", ("Grace",))
    rows = (await context.execute("select * from users order by id")).rows

    assert rows == [
        {"id": 1, "name": "Ada", "age": 36},
        {"id": 2, "name": "Grace", "age": None},
    ]


@pytest.mark.asyncio
async def test_add_columns_one_statement_each(
    context: DatabaseContext, users_blueprint: Blueprint
) -> None:
    await context.run_blueprint(users_blueprint)
    add = Blueprint(
        "users",
        columns=[
            Column("email", ColumnType.STRING, nullable=True),
            Column("active", ColumnType.BOOLEAN, default_value=True),
        ],
        commands=[AddCommand()],
    )

    results = await context.run_blueprint(add)
    await context.execute("insert into users (name) values (?)", ("Linus",))
    row = (await context.execute("select email, active from users")).first()

    assert len(results) == 2
    assert row == {"email": None, "active": 1}


@pytest.mark.asyncio
async def test_inline_foreign_key_enforced(
    context: DatabaseContext, users_blueprint: Blueprint
) -> None:
    await context.run_blueprint(users_blueprint)
    posts = Blueprint(
        "posts",
        columns=[
            Column("id", ColumnType.INTEGER, auto_increment=True),
            Column("user_id", ColumnType.INTEGER),
        ],
        commands=[
            CreateCommand(),
            ForeignCommand("user_id", on="users", references="id"),
        ],
    )
    await context.run_blueprint(posts)

    with pytest.raises(ExecutionError):
        await context.execute("insert into posts (user_id) values (?)", (99,))


@pytest.mark.asyncio
async def test_unsupported_command_runs_nothing(
    context: DatabaseContext, users_blueprint: Blueprint
) -> None:
    await context.run_blueprint(users_blueprint)

    with pytest.raises(UnsupportedOperationError):
        await context.run_blueprint(
            Blueprint("users", commands=[DropColumnCommand("age")])
        )

    rows = (await context.execute("select * from users")).rows
    assert rows == []


@pytest.mark.asyncio
async def test_session_reuses_one_connection(context: DatabaseContext) -> None:
    async with context.session() as connection:
        first = await context.execute("select 1 as one", connection=connection)
        second = await context.execute("select 2 as two", connection=connection)

    assert first.connection_id == second.connection_id == connection.connection_id
    assert context.pool is not None
    assert context.pool.stats()["in_use"] == 0


@pytest.mark.asyncio
async def test_single_connection_mode(temp_db_path: Path) -> None:
    settings = DatabaseSettings(
        client="sqlite3", connection={"filename": str(temp_db_path)}, pool=False
    )

    async with DatabaseContext(settings) as context:
        assert context.pool is None
        assert context.connection is not None

        results = [await context.execute("select 1") for _ in range(3)]

        ids = {result.connection_id for result in results}
        assert ids == {context.connection.connection_id}

    assert context.is_initialized is False


@pytest.mark.asyncio
async def test_contexts_are_independent(tmp_path: Path) -> None:
    first = DatabaseContext(
        DatabaseSettings(connection={"filename": str(tmp_path / "a.db")}, pool=False),
        name="a",
    )
    second = DatabaseContext(
        DatabaseSettings(connection={"filename": str(tmp_path / "b.db")}, pool=False),
        name="b",
    )

    async with first, second:
        await first.execute("create table only_in_a (id integer)")

        assert await first.has_table("only_in_a") is True
        assert await second.has_table("only_in_a") is False


@pytest.mark.asyncio
async def test_close_makes_context_unusable(sqlite_settings: DatabaseSettings) -> None:
    context = DatabaseContext(sqlite_settings)
    await context.initialize()
    await context.close()

    with pytest.raises(ConfigurationError):
        await context.execute("select 1")
