"""SQLAlchemy implementation of BankReconciliationRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.entities import BankReconciliation
from kassa.domain.banking.repositories import BankReconciliationRepository
from kassa.domain.banking.value_objects import ReconciliationStatus
from kassa.domain.shared.time import utc_now
from kassa.infrastructure.persistence.sqlalchemy.models import BankReconciliationModel
from kassa.infrastructure.persistence.sqlalchemy.repositories._utils import (
    to_money,
    to_optional_money,
)

if TYPE_CHECKING:
    from kassa.application.context import TenantContext

logger = logging.getLogger(__name__)


class BankReconciliationRepositorySQLAlchemy(BankReconciliationRepository):
    """SQLAlchemy implementation of reconciliation session repository."""

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant_id = tenant.tenant_id

    async def add(self, reconciliation: BankReconciliation) -> None:
        model = BankReconciliationModel(
            id=reconciliation.id,
            tenant_id=self._tenant_id,
            bank_account_id=reconciliation.bank_account_id,
            statement_date=reconciliation.statement_date,
            opening_balance=reconciliation.opening_balance,
            closing_balance=reconciliation.closing_balance,
            reconciled_balance=reconciliation.reconciled_balance,
            status=reconciliation.status,
            notes=reconciliation.notes,
            created_by=reconciliation.created_by,
            completed_at=reconciliation.completed_at,
            completed_by=reconciliation.completed_by,
            created_at=reconciliation.created_at,
        )
        self._session.add(model)
        await self._session.flush()

    async def find_by_id(self, reconciliation_id: UUID) -> Optional[BankReconciliation]:
        stmt = select(BankReconciliationModel).where(
            BankReconciliationModel.tenant_id == self._tenant_id,
            BankReconciliationModel.id == reconciliation_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._map_to_domain(model)

    async def find_by_account(self, bank_account_id: UUID) -> list[BankReconciliation]:
        stmt = (
            select(BankReconciliationModel)
            .where(
                BankReconciliationModel.tenant_id == self._tenant_id,
                BankReconciliationModel.bank_account_id == bank_account_id,
            )
            .order_by(
                BankReconciliationModel.statement_date.desc(),
                BankReconciliationModel.created_at.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def mark_completed(
        self,
        reconciliation_id: UUID,
        reconciled_balance: Decimal,
        completed_by: Optional[UUID] = None,
    ) -> bool:
        result = await self._session.execute(
            update(BankReconciliationModel)
            .where(
                BankReconciliationModel.tenant_id == self._tenant_id,
                BankReconciliationModel.id == reconciliation_id,
                BankReconciliationModel.status == ReconciliationStatus.IN_PROGRESS,
            )
            .values(
                status=ReconciliationStatus.COMPLETED,
                reconciled_balance=reconciled_balance,
                completed_at=utc_now(),
                completed_by=completed_by,
            ),
        )
        return result.rowcount == 1

    def _map_to_domain(self, model: BankReconciliationModel) -> BankReconciliation:
        return BankReconciliation(
            id=model.id,
            tenant_id=model.tenant_id,
            bank_account_id=model.bank_account_id,
            statement_date=model.statement_date,
            opening_balance=to_money(model.opening_balance),
            closing_balance=to_money(model.closing_balance),
            reconciled_balance=to_optional_money(model.reconciled_balance),
            status=model.status,
            notes=model.notes,
            created_by=model.created_by,
            completed_at=model.completed_at,
            completed_by=model.completed_by,
            created_at=model.created_at,
        )
