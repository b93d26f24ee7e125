"""SQLAlchemy model for bank transactions."""

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
    String,
    Text,
    Uuid,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from kassa.domain.banking.value_objects import TransactionStatus
from kassa.domain.shared.time import utc_now
from kassa.infrastructure.persistence.sqlalchemy.models.base import (
    MONEY_PRECISION,
    MONEY_SCALE,
    Base,
    TenantMixin,
)


class BankTransactionModel(Base, TenantMixin):
    """Database model for imported bank transactions.

    Database Constraints:
    - UNMATCHED rows carry no payment link
    - MATCHED and RECONCILED rows carry a payment link
    - RECONCILED rows carry a reconciliation link

    Status changes are written with ``UPDATE ... WHERE status = ...`` so
    concurrent writers cannot both move the same row.
    """

    __tablename__ = "bank_transactions"

    __table_args__ = (
        CheckConstraint(
            "(status != 'UNMATCHED' OR matched_payment_id IS NULL)",
            name="check_unmatched_has_no_payment",
        ),
        CheckConstraint(
            "(status = 'UNMATCHED' OR matched_payment_id IS NOT NULL)",
            name="check_matched_has_payment",
        ),
        CheckConstraint(
            "(status != 'RECONCILED' OR reconciliation_id IS NOT NULL)",
            name="check_reconciled_has_reconciliation",
        ),
        Index(
            "idx_bank_tx_account_date",
            "tenant_id",
            "bank_account_id",
            "transaction_date",
        ),
        Index("idx_bank_tx_external_id", "bank_account_id", "external_id"),
        Index("idx_bank_tx_reconciliation", "reconciliation_id", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    bank_account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id"),
        nullable=False,
        index=True,
    )

    # Transaction dates
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    value_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Amount and currency
    amount: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    # Statement text
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reference: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    counterparty_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )
    counterparty_account: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="",
    )
    external_id: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Matching and reconciliation state
    status: Mapped[TransactionStatus] = mapped_column(
        SQLEnum(
            TransactionStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
            length=20,
        ),
        nullable=False,
        default=TransactionStatus.UNMATCHED,
        index=True,
    )
    matched_payment_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("payments.id"),
        nullable=True,
        index=True,
    )
    matched_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    journal_entry_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    reconciliation_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid,
        ForeignKey("bank_reconciliations.id"),
        nullable=True,
    )

    # Import tracking
    import_id: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    imported_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return (
            f"<BankTransactionModel(id={self.id}, "
            f"date={self.transaction_date}, amount={self.amount}, "
            f"status={self.status.value})>"
        )
