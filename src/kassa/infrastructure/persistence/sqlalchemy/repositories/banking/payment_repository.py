"""SQLAlchemy implementation of PaymentRepository."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.entities import Payment, format_payment_number
from kassa.domain.banking.repositories import CANDIDATE_LIMIT, PaymentRepository
from kassa.domain.banking.value_objects import PaymentType
from kassa.infrastructure.persistence.sqlalchemy.models import (
    BankTransactionModel,
    PaymentModel,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories._utils import to_money

if TYPE_CHECKING:
    from kassa.application.context import TenantContext


class PaymentRepositorySQLAlchemy(PaymentRepository):
    """SQLAlchemy implementation of payment repository.

    Payment amounts are stored as positive values; ``payment_type`` carries
    the direction.
    """

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant_id = tenant.tenant_id

    async def find_by_id(self, payment_id: UUID) -> Optional[Payment]:
        stmt = select(PaymentModel).where(
            PaymentModel.tenant_id == self._tenant_id,
            PaymentModel.id == payment_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._map_to_domain(model)

    async def find_match_candidates(
        self,
        amount: Decimal,
        payment_type: PaymentType,
        tolerance: Decimal,
        limit: int = CANDIDATE_LIMIT,
    ) -> list[Payment]:
        target = abs(amount)
        linked = select(BankTransactionModel.matched_payment_id).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.matched_payment_id.is_not(None),
        )
        stmt = (
            select(PaymentModel)
            .where(
                PaymentModel.tenant_id == self._tenant_id,
                PaymentModel.payment_type == payment_type,
                PaymentModel.amount >= target - target * tolerance,
                PaymentModel.amount <= target + target * tolerance,
                PaymentModel.amount > PaymentModel.allocated_amount,
                PaymentModel.id.not_in(linked),
            )
            .order_by(
                func.abs(PaymentModel.amount - target),
                PaymentModel.payment_date.desc(),
            )
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def add(self, payment: Payment) -> None:
        model = PaymentModel(
            id=payment.id,
            tenant_id=self._tenant_id,
            payment_number=payment.payment_number,
            payment_type=payment.payment_type,
            payment_date=payment.payment_date,
            amount=payment.amount,
            allocated_amount=payment.allocated_amount,
            currency=payment.currency,
            reference=payment.reference,
            contact_name=payment.contact_name,
            notes=payment.notes,
            created_by=payment.created_by,
        )
        self._session.add(model)
        await self._session.flush()

    async def next_sequence(self, payment_type: PaymentType) -> int:
        stmt = select(func.count(PaymentModel.id)).where(
            PaymentModel.tenant_id == self._tenant_id,
            PaymentModel.payment_type == payment_type,
        )
        sequence = (await self._session.execute(stmt)).scalar_one() + 1

        # Numbers entered by hand can already occupy the next slot
        while await self._number_taken(format_payment_number(payment_type, sequence)):
            sequence += 1
        return sequence

    async def _number_taken(self, payment_number: str) -> bool:
        stmt = select(PaymentModel.id).where(
            PaymentModel.tenant_id == self._tenant_id,
            PaymentModel.payment_number == payment_number,
        )
        result = await self._session.execute(stmt.limit(1))
        return result.first() is not None

    def _map_to_domain(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            tenant_id=model.tenant_id,
            payment_number=model.payment_number,
            payment_type=model.payment_type,
            payment_date=model.payment_date,
            amount=to_money(model.amount),
            allocated_amount=to_money(model.allocated_amount),
            currency=model.currency,
            reference=model.reference,
            contact_name=model.contact_name,
            notes=model.notes,
            created_by=model.created_by,
        )
