"""SQLAlchemy base configuration."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from kassa.domain.shared.time import utc_now

# Monetary columns keep Decimal precision end to end
MONEY_PRECISION = 28
MONEY_SCALE = 8


class Base(DeclarativeBase):
    """Base class for all database models."""


class TenantMixin:
    """Mixin for the tenant namespace column every table carries."""

    tenant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps (utc_now)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
