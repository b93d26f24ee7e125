"""FastAPI dependency injection for the Kassa API.

Provides dependencies for:
- Database sessions
- Tenant scope (from gateway headers)
- Repository factory scoped to the tenant
- Matcher tuning from settings
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from kassa.application.context import TenantContext
from kassa.domain.banking.services import MatcherConfig
from kassa.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
    create_matcher_config_from_settings,
)
from kassa.presentation.api.config import get_api_settings
from kassa_config.settings import Settings

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"
USER_HEADER = "X-User-ID"


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_api_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Routers commit; anything left uncommitted is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Tenant Scope
# -----------------------------------------------------------------------------


def _parse_uuid_header(name: str, value: str) -> UUID:
    try:
        return UUID(value.strip())
    except ValueError as e:
        logger.warning("Malformed %s header: %r", name, value)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} header must be a UUID",
        ) from e


async def get_tenant_context(
    x_tenant_id: Annotated[Optional[str], Header()] = None,
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> TenantContext:
    """
    Build the request's tenant scope from gateway headers.

    Authentication happens upstream; the gateway forwards the tenant and
    the acting user as ``X-Tenant-ID`` and ``X-User-ID``.

    Raises
    ------
    HTTPException
        401 if the tenant header is missing, 400 if a header is not a UUID
    """
    if not x_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{TENANT_HEADER} header required",
        )

    tenant_id = _parse_uuid_header(TENANT_HEADER, x_tenant_id)
    user_id = _parse_uuid_header(USER_HEADER, x_user_id) if x_user_id else None
    return TenantContext(tenant_id=tenant_id, user_id=user_id)


async def get_repository_factory(
    session: AsyncSession = Depends(get_db_session),
    tenant: TenantContext = Depends(get_tenant_context),
) -> SQLAlchemyRepositoryFactory:
    """
    Get repository factory for the current tenant.

    The factory creates tenant-scoped repositories sharing the request session.
    """
    return SQLAlchemyRepositoryFactory(session=session, tenant=tenant)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


# -----------------------------------------------------------------------------
# Settings-derived Dependencies
# -----------------------------------------------------------------------------


def get_matcher_config() -> MatcherConfig:
    """Suggestion engine tuning from settings."""
    return create_matcher_config_from_settings()


MatcherSettings = Annotated[MatcherConfig, Depends(get_matcher_config)]
APISettings = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Application Commands & Queries
# -----------------------------------------------------------------------------
# Application layer classes have from_factory() classmethods that encapsulate
# their dependency knowledge. Use them directly in routers:
#
#   async def list_bank_accounts(factory: RepoFactory, ...):
#       query = ListBankAccountsQuery.from_factory(factory)  # NOQA: ERA001
