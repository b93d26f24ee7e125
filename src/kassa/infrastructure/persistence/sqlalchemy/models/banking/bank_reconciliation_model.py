"""SQLAlchemy model for reconciliation sessions."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    Text,
    Uuid,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from kassa.domain.banking.value_objects import ReconciliationStatus
from kassa.infrastructure.persistence.sqlalchemy.models.base import (
    MONEY_PRECISION,
    MONEY_SCALE,
    Base,
    TenantMixin,
    TimestampMixin,
)


class BankReconciliationModel(Base, TenantMixin, TimestampMixin):
    """Database model for reconciliation sessions.

    Database Constraints:
    - If status = 'COMPLETED', completed_at must not be NULL
    """

    __tablename__ = "bank_reconciliations"

    __table_args__ = (
        CheckConstraint(
            "(status != 'COMPLETED' OR completed_at IS NOT NULL)",
            name="check_completed_has_timestamp",
        ),
        Index(
            "idx_bank_rec_account_date",
            "tenant_id",
            "bank_account_id",
            "statement_date",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    bank_account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id"),
        nullable=False,
    )

    statement_date: Mapped[date] = mapped_column(Date, nullable=False)
    opening_balance: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
    )
    closing_balance: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
    )
    reconciled_balance: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=True,
    )

    status: Mapped[ReconciliationStatus] = mapped_column(
        SQLEnum(
            ReconciliationStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
            length=20,
        ),
        nullable=False,
        default=ReconciliationStatus.IN_PROGRESS,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    completed_by: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<BankReconciliationModel(id={self.id}, "
            f"statement_date={self.statement_date}, status={self.status.value})>"
        )
