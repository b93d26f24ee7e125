"""Database initialization utilities."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

# Import models to register with Base.metadata
import kassa.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from kassa.infrastructure.persistence.sqlalchemy.models.base import Base
from kassa_config.settings import get_settings

logger = logging.getLogger(__name__)


def _get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Get the database engine for initialization."""
    return create_async_engine(
        database_url or get_settings().database_url,
        echo=False,
        pool_pre_ping=True,
    )


def display_url(database_url: str) -> str:
    """Database URL without credentials, for log and console output."""
    return database_url.split("@")[-1] if "@" in database_url else database_url


async def create_tables(database_url: Optional[str] = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = _get_engine(database_url)
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await engine.dispose()
    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(database_url: Optional[str] = None) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    engine = _get_engine(database_url)
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
    logger.info("Database tables dropped successfully")
