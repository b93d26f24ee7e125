"""Open, fill and complete reconciliation sessions."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.domain.banking.entities import BankReconciliation, BankTransaction
from kassa.domain.banking.exceptions import (
    BankAccountNotFoundError,
    BankTransactionNotFoundError,
    ReconciliationAccountMismatchError,
    ReconciliationNotFoundError,
    ReconciliationStateConflictError,
    TransactionStateConflictError,
)
from kassa.domain.banking.repositories import (
    BankAccountRepository,
    BankReconciliationRepository,
    BankTransactionRepository,
)
from kassa.domain.banking.value_objects import TransactionStatus

if TYPE_CHECKING:
    from kassa.application.context import TenantContext
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


async def _load_reconciliation(
    repository: BankReconciliationRepository,
    reconciliation_id: UUID,
) -> BankReconciliation:
    reconciliation = await repository.find_by_id(reconciliation_id)
    if reconciliation is None:
        raise ReconciliationNotFoundError(reconciliation_id)
    return reconciliation


class OpenReconciliationCommand:
    """Start an IN_PROGRESS reconciliation session for an account.

    Overlapping sessions on the same account are not prevented.
    """

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        reconciliation_repository: BankReconciliationRepository,
        tenant: TenantContext,
    ):
        self._account_repo = bank_account_repository
        self._reconciliation_repo = reconciliation_repository
        self._tenant = tenant

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> OpenReconciliationCommand:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            reconciliation_repository=factory.reconciliation_repository(),
            tenant=factory.tenant,
        )

    async def execute(  # noqa: PLR0913
        self,
        account_id: UUID,
        statement_date: date,
        opening_balance: Decimal,
        closing_balance: Decimal,
        notes: Optional[str] = None,
    ) -> BankReconciliation:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)

        reconciliation = BankReconciliation(
            tenant_id=self._tenant.tenant_id,
            bank_account_id=account.id,
            statement_date=statement_date,
            opening_balance=opening_balance,
            closing_balance=closing_balance,
            created_by=self._tenant.user_id,
            notes=notes,
        )
        await self._reconciliation_repo.add(reconciliation)
        logger.info(
            "Opened reconciliation %s for account %s (statement %s)",
            reconciliation.id,
            account.id,
            statement_date.isoformat(),
        )
        return reconciliation


class AddTransactionToReconciliationCommand:
    """Tag a transaction with an open session; its status stays as it is."""

    def __init__(
        self,
        transaction_repository: BankTransactionRepository,
        reconciliation_repository: BankReconciliationRepository,
    ):
        self._transaction_repo = transaction_repository
        self._reconciliation_repo = reconciliation_repository

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> AddTransactionToReconciliationCommand:
        return cls(
            transaction_repository=factory.bank_transaction_repository(),
            reconciliation_repository=factory.reconciliation_repository(),
        )

    async def execute(
        self,
        transaction_id: UUID,
        reconciliation_id: UUID,
    ) -> BankTransaction:
        transaction = await self._transaction_repo.find_by_id(transaction_id)
        if transaction is None:
            raise BankTransactionNotFoundError(transaction_id)

        reconciliation = await _load_reconciliation(
            self._reconciliation_repo,
            reconciliation_id,
        )
        reconciliation.ensure_in_progress()

        if reconciliation.bank_account_id != transaction.bank_account_id:
            raise ReconciliationAccountMismatchError(transaction.id, reconciliation.id)

        transaction.assign_to_reconciliation(reconciliation.id)
        if not await self._transaction_repo.assign_reconciliation(
            transaction.id,
            reconciliation.id,
        ):
            raise TransactionStateConflictError(
                transaction.id,
                expected_status="not reconciled",
            )

        logger.debug(
            "Tagged transaction %s with reconciliation %s",
            transaction.id,
            reconciliation.id,
        )
        return transaction


class CompleteReconciliationCommand:
    """Close a session and lock its matched transactions.

    In one unit of work the session becomes COMPLETED and every MATCHED
    transaction tagged with it becomes RECONCILED. UNMATCHED transactions
    keep their status and tag. The declared balances are not checked here;
    see ``ReconciliationSummaryQuery`` for the tie-out.
    """

    def __init__(
        self,
        transaction_repository: BankTransactionRepository,
        reconciliation_repository: BankReconciliationRepository,
        tenant: TenantContext,
    ):
        self._transaction_repo = transaction_repository
        self._reconciliation_repo = reconciliation_repository
        self._tenant = tenant

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> CompleteReconciliationCommand:
        return cls(
            transaction_repository=factory.bank_transaction_repository(),
            reconciliation_repository=factory.reconciliation_repository(),
            tenant=factory.tenant,
        )

    async def execute(self, reconciliation_id: UUID) -> BankReconciliation:
        reconciliation = await _load_reconciliation(
            self._reconciliation_repo,
            reconciliation_id,
        )
        reconciliation.ensure_in_progress()

        matched_total, _ = await self._transaction_repo.sum_for_reconciliation(
            reconciliation.id,
            (TransactionStatus.MATCHED,),
        )
        reconciled_balance = reconciliation.opening_balance + matched_total

        if not await self._reconciliation_repo.mark_completed(
            reconciliation.id,
            reconciled_balance,
            completed_by=self._tenant.user_id,
        ):
            raise ReconciliationStateConflictError(reconciliation.id)

        promoted = await self._transaction_repo.reconcile_matched(reconciliation.id)
        reconciliation.complete(reconciled_balance, completed_by=self._tenant.user_id)

        logger.info(
            "Completed reconciliation %s: %d transaction(s) reconciled, "
            "reconciled balance %s",
            reconciliation.id,
            promoted,
            reconciled_balance,
        )
        return reconciliation
