"""
Pytest configuration for kassa integration tests.

Persistence and API tests run against in-memory SQLite by default. Tests
marked ``@pytest.mark.integration`` use the Testcontainers PostgreSQL
fixtures instead.
"""

import pytest

from kassa.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    sqlite_engine,
    sqlite_session,
    sqlite_session_maker,
)

__all__ = [
    "async_engine",
    "db_session",
    "postgres_container",
    "sqlite_engine",
    "sqlite_session",
    "sqlite_session_maker",
]


@pytest.fixture
def factory(sqlite_session, tenant) -> SQLAlchemyRepositoryFactory:
    """Repository factory for the default tenant on the SQLite session."""
    return SQLAlchemyRepositoryFactory(sqlite_session, tenant)


@pytest.fixture
def other_factory(sqlite_session, other_tenant) -> SQLAlchemyRepositoryFactory:
    """Repository factory for a second tenant sharing the same database."""
    return SQLAlchemyRepositoryFactory(sqlite_session, other_tenant)
