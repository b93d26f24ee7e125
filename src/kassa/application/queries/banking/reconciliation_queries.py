"""Read reconciliation sessions and their balance tie-out."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from kassa.application.dtos.banking import ReconciliationSummary
from kassa.domain.banking.entities import BankReconciliation
from kassa.domain.banking.exceptions import (
    BankAccountNotFoundError,
    ReconciliationNotFoundError,
)
from kassa.domain.banking.repositories import (
    BankAccountRepository,
    BankReconciliationRepository,
    BankTransactionRepository,
)
from kassa.domain.banking.value_objects import TransactionStatus

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory


class GetReconciliationQuery:
    """Load one reconciliation session."""

    def __init__(self, reconciliation_repository: BankReconciliationRepository):
        self._reconciliation_repo = reconciliation_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetReconciliationQuery:
        return cls(reconciliation_repository=factory.reconciliation_repository())

    async def execute(self, reconciliation_id: UUID) -> BankReconciliation:
        reconciliation = await self._reconciliation_repo.find_by_id(reconciliation_id)
        if reconciliation is None:
            raise ReconciliationNotFoundError(reconciliation_id)
        return reconciliation


class ListReconciliationsQuery:
    """Sessions of one account, latest statement first."""

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        reconciliation_repository: BankReconciliationRepository,
    ):
        self._account_repo = bank_account_repository
        self._reconciliation_repo = reconciliation_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListReconciliationsQuery:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            reconciliation_repository=factory.reconciliation_repository(),
        )

    async def execute(self, account_id: UUID) -> list[BankReconciliation]:
        if await self._account_repo.find_by_id(account_id) is None:
            raise BankAccountNotFoundError(account_id)
        return await self._reconciliation_repo.find_by_account(account_id)


class ReconciliationSummaryQuery:
    """Compare declared statement balances with the tagged transactions.

    Purely informational: the result never blocks completing a session.
    """

    def __init__(
        self,
        reconciliation_repository: BankReconciliationRepository,
        transaction_repository: BankTransactionRepository,
    ):
        self._reconciliation_repo = reconciliation_repository
        self._transaction_repo = transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ReconciliationSummaryQuery:
        return cls(
            reconciliation_repository=factory.reconciliation_repository(),
            transaction_repository=factory.bank_transaction_repository(),
        )

    async def execute(self, reconciliation_id: UUID) -> ReconciliationSummary:
        reconciliation = await self._reconciliation_repo.find_by_id(reconciliation_id)
        if reconciliation is None:
            raise ReconciliationNotFoundError(reconciliation_id)

        matched_total, matched_count = (
            await self._transaction_repo.sum_for_reconciliation(
                reconciliation.id,
                (TransactionStatus.MATCHED, TransactionStatus.RECONCILED),
            )
        )
        _, unmatched_count = await self._transaction_repo.sum_for_reconciliation(
            reconciliation.id,
            (TransactionStatus.UNMATCHED,),
        )
        return ReconciliationSummary(
            reconciliation=reconciliation,
            matched_total=matched_total,
            matched_count=matched_count,
            unmatched_count=unmatched_count,
        )
