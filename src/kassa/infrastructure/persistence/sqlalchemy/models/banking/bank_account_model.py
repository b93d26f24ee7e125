"""SQLAlchemy model for bank accounts."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from kassa.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TenantMixin,
    TimestampMixin,
)


class BankAccountModel(Base, TenantMixin, TimestampMixin):
    """Database model for bank accounts.

    The balance is not stored; it is summed from ``bank_transactions``.
    """

    __tablename__ = "bank_accounts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    # Account identification
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_number: Mapped[str] = mapped_column(String(50), nullable=False)
    bank_name: Mapped[Optional[str]] = mapped_column(String(255))
    swift_code: Mapped[Optional[str]] = mapped_column(String(11))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")

    # Link to the general ledger (owned by the accounting side)
    gl_account_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)

    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("idx_bank_accounts_tenant_name", "tenant_id", "name"),
        Index("idx_bank_accounts_tenant_default", "tenant_id", "is_default"),
    )

    def __repr__(self) -> str:
        return (
            f"<BankAccountModel(id={self.id}, "
            f"name={self.name}, default={self.is_default})>"
        )
