"""SQLAlchemy implementation of BankTransactionRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.entities import BankTransaction
from kassa.domain.banking.repositories import (
    BankTransactionRepository,
    TransactionFilter,
)
from kassa.domain.banking.value_objects import StatementLine, TransactionStatus
from kassa.domain.shared.time import utc_now
from kassa.infrastructure.persistence.sqlalchemy.models import BankTransactionModel
from kassa.infrastructure.persistence.sqlalchemy.repositories._utils import to_money

if TYPE_CHECKING:
    from kassa.application.context import TenantContext

logger = logging.getLogger(__name__)


class BankTransactionRepositorySQLAlchemy(BankTransactionRepository):
    """SQLAlchemy implementation of bank transaction repository.

    Status transitions are single conditional UPDATE statements; the
    affected row count tells whether the expected status still held.
    """

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant_id = tenant.tenant_id

    async def add(self, transaction: BankTransaction) -> None:
        self._session.add(self._create_model_from_domain(transaction))
        await self._session.flush()

    async def find_by_id(self, transaction_id: UUID) -> Optional[BankTransaction]:
        stmt = select(BankTransactionModel).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.id == transaction_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._map_to_domain(model)

    async def find_all(self, criteria: TransactionFilter) -> list[BankTransaction]:
        stmt = select(BankTransactionModel).where(
            BankTransactionModel.tenant_id == self._tenant_id,
        )
        if criteria.bank_account_id is not None:
            stmt = stmt.where(
                BankTransactionModel.bank_account_id == criteria.bank_account_id,
            )
        if criteria.status is not None:
            stmt = stmt.where(BankTransactionModel.status == criteria.status)
        if criteria.from_date is not None:
            stmt = stmt.where(BankTransactionModel.transaction_date >= criteria.from_date)
        if criteria.to_date is not None:
            stmt = stmt.where(BankTransactionModel.transaction_date <= criteria.to_date)
        if criteria.min_amount is not None:
            stmt = stmt.where(BankTransactionModel.amount >= criteria.min_amount)
        if criteria.max_amount is not None:
            stmt = stmt.where(BankTransactionModel.amount <= criteria.max_amount)

        stmt = stmt.order_by(
            BankTransactionModel.transaction_date.desc(),
            BankTransactionModel.imported_at.desc(),
        )
        if criteria.limit:
            stmt = stmt.limit(criteria.limit)

        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def exists_duplicate(self, bank_account_id: UUID, line: StatementLine) -> bool:
        stmt = select(BankTransactionModel.amount).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.bank_account_id == bank_account_id,
        )
        if line.external_id:
            stmt = stmt.where(BankTransactionModel.external_id == line.external_id)
            result = await self._session.execute(stmt.limit(1))
            return result.first() is not None

        stmt = stmt.where(
            BankTransactionModel.transaction_date == line.transaction_date,
            BankTransactionModel.description == line.description,
        )
        result = await self._session.execute(stmt)
        # Amounts are compared as Decimals so SQLite float storage cannot skew it
        return any(to_money(amount) == line.amount for amount in result.scalars())

    async def mark_matched(self, transaction_id: UUID, payment_id: UUID) -> bool:
        return await self._transition(
            transaction_id,
            TransactionStatus.UNMATCHED,
            status=TransactionStatus.MATCHED,
            matched_payment_id=payment_id,
            matched_at=utc_now(),
        )

    async def mark_unmatched(self, transaction_id: UUID) -> bool:
        return await self._transition(
            transaction_id,
            TransactionStatus.MATCHED,
            status=TransactionStatus.UNMATCHED,
            matched_payment_id=None,
            matched_at=None,
        )

    async def assign_reconciliation(
        self,
        transaction_id: UUID,
        reconciliation_id: UUID,
    ) -> bool:
        result = await self._session.execute(
            update(BankTransactionModel)
            .where(
                BankTransactionModel.tenant_id == self._tenant_id,
                BankTransactionModel.id == transaction_id,
                BankTransactionModel.status != TransactionStatus.RECONCILED,
            )
            .values(reconciliation_id=reconciliation_id),
        )
        return result.rowcount == 1

    async def reconcile_matched(self, reconciliation_id: UUID) -> int:
        result = await self._session.execute(
            update(BankTransactionModel)
            .where(
                BankTransactionModel.tenant_id == self._tenant_id,
                BankTransactionModel.reconciliation_id == reconciliation_id,
                BankTransactionModel.status == TransactionStatus.MATCHED,
            )
            .values(status=TransactionStatus.RECONCILED),
        )
        logger.debug(
            "Reconciled %d transaction(s) for session %s",
            result.rowcount,
            reconciliation_id,
        )
        return result.rowcount

    async def sum_for_reconciliation(
        self,
        reconciliation_id: UUID,
        statuses: tuple[TransactionStatus, ...],
    ) -> tuple[Decimal, int]:
        stmt = select(
            func.sum(BankTransactionModel.amount),
            func.count(BankTransactionModel.id),
        ).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.reconciliation_id == reconciliation_id,
            BankTransactionModel.status.in_(statuses),
        )
        result = await self._session.execute(stmt)
        total, count = result.one()
        return to_money(total), count

    async def _transition(
        self,
        transaction_id: UUID,
        expected: TransactionStatus,
        **values: object,
    ) -> bool:
        result = await self._session.execute(
            update(BankTransactionModel)
            .where(
                BankTransactionModel.tenant_id == self._tenant_id,
                BankTransactionModel.id == transaction_id,
                BankTransactionModel.status == expected,
            )
            .values(**values),
        )
        return result.rowcount == 1

    def _create_model_from_domain(
        self,
        transaction: BankTransaction,
    ) -> BankTransactionModel:
        return BankTransactionModel(
            id=transaction.id,
            tenant_id=self._tenant_id,
            bank_account_id=transaction.bank_account_id,
            transaction_date=transaction.transaction_date,
            value_date=transaction.value_date,
            amount=transaction.amount,
            currency=transaction.currency,
            description=transaction.description,
            reference=transaction.reference,
            counterparty_name=transaction.counterparty_name,
            counterparty_account=transaction.counterparty_account,
            external_id=transaction.external_id,
            status=transaction.status,
            matched_payment_id=transaction.matched_payment_id,
            matched_at=transaction.matched_at,
            journal_entry_id=transaction.journal_entry_id,
            reconciliation_id=transaction.reconciliation_id,
            import_id=transaction.import_id,
            imported_at=transaction.imported_at,
        )

    def _map_to_domain(self, model: BankTransactionModel) -> BankTransaction:
        return BankTransaction(
            id=model.id,
            tenant_id=model.tenant_id,
            bank_account_id=model.bank_account_id,
            transaction_date=model.transaction_date,
            value_date=model.value_date,
            amount=to_money(model.amount),
            currency=model.currency,
            description=model.description,
            reference=model.reference,
            counterparty_name=model.counterparty_name,
            counterparty_account=model.counterparty_account,
            external_id=model.external_id,
            status=model.status,
            matched_payment_id=model.matched_payment_id,
            matched_at=model.matched_at,
            journal_entry_id=model.journal_entry_id,
            reconciliation_id=model.reconciliation_id,
            import_id=model.import_id,
            imported_at=model.imported_at,
        )
