"""Pytest fixtures for API integration tests.

Each test gets its own SQLite file so the TestClient's event loop and the
setup loop never share a connection.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from kassa.infrastructure.persistence.sqlalchemy.models.base import Base
from kassa.presentation.api.app import API_V1_PREFIX, create_app
from kassa.presentation.api.config import get_api_settings
from kassa.presentation.api.dependencies import get_db_session
from kassa_config.settings import Settings
from tests.shared.fixtures.factories import TestTenantFactory

MAX_UPLOAD_BYTES = 64 * 1024


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'kassa-test.db'}"


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings with debug enabled and a small upload limit."""
    return Settings(
        database_url=database_url,
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        import_preview_max_rows=5,
        import_max_file_bytes=MAX_UPLOAD_BYTES,
    )


def _setup_test_database(async_engine):
    """Create all tables in a fresh event loop, apart from TestClient's loop."""

    async def _setup():
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_setup())
    finally:
        loop.close()


@pytest.fixture
def test_client(api_settings, database_url):
    """Create a test client on a per-test SQLite database.

    The lifespan is not run; tables are created up front and FastAPI opens
    its own sessions inside the TestClient's event loop.
    """
    # NullPool: no connection outlives the loop that opened it
    async_engine = create_async_engine(database_url, poolclass=NullPool)
    _setup_test_database(async_engine)

    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def tenant_headers() -> dict[str, str]:
    """Gateway headers for the default tenant."""
    return TestTenantFactory.headers()


@pytest.fixture
def other_tenant_headers() -> dict[str, str]:
    """Gateway headers for a second tenant."""
    return TestTenantFactory.headers(TestTenantFactory.other())


@pytest.fixture
def bank_account(test_client, api_v1_prefix, tenant_headers) -> dict:
    """A bank account created through the API."""
    response = test_client.post(
        f"{api_v1_prefix}/bank-accounts",
        json={"name": "Operating", "account_number": "EE382200221020145685"},
        headers=tenant_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
