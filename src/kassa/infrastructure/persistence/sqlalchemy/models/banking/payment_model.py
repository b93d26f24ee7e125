"""SQLAlchemy model for payments."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Date, Index, Numeric, String, Text, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from kassa.domain.banking.value_objects import PaymentType
from kassa.infrastructure.persistence.sqlalchemy.models.base import (
    MONEY_PRECISION,
    MONEY_SCALE,
    Base,
    TenantMixin,
    TimestampMixin,
)


class PaymentModel(Base, TenantMixin, TimestampMixin):
    """Database model for payments recorded by the invoicing side.

    Only the columns matching needs are mapped here.
    """

    __tablename__ = "payments"

    __table_args__ = (
        Index("idx_payments_tenant_number", "tenant_id", "payment_number", unique=True),
        Index("idx_payments_tenant_type_amount", "tenant_id", "payment_type", "amount"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    payment_number: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_type: Mapped[PaymentType] = mapped_column(
        SQLEnum(
            PaymentType,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
            length=20,
        ),
        nullable=False,
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
    )
    allocated_amount: Mapped[Decimal] = mapped_column(
        Numeric(MONEY_PRECISION, MONEY_SCALE),
        nullable=False,
        default=Decimal("0"),
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="EUR")
    reference: Mapped[Optional[str]] = mapped_column(String(255))
    contact_name: Mapped[Optional[str]] = mapped_column(String(255))
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_by: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<PaymentModel(id={self.id}, number={self.payment_number}, "
            f"amount={self.amount})>"
        )
