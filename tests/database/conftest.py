"""Shared fixtures for pool and dispatcher tests."""

import pytest

from tests.database.fakes import FakeConnectionFactory


@pytest.fixture
def connection_factory() -> FakeConnectionFactory:
    """Create a factory of mock-backed connections."""
    return FakeConnectionFactory()
