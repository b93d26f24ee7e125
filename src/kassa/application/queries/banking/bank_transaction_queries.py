"""Read imported bank transactions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.domain.banking.entities import BankTransaction
from kassa.domain.banking.exceptions import BankTransactionNotFoundError
from kassa.domain.banking.repositories import (
    BankTransactionRepository,
    TransactionFilter,
)
from kassa.domain.banking.value_objects import TransactionStatus

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory

DEFAULT_TRANSACTION_LIMIT = 100


class GetBankTransactionQuery:
    """Load a single bank transaction."""

    def __init__(self, transaction_repository: BankTransactionRepository):
        self._transaction_repo = transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetBankTransactionQuery:
        return cls(transaction_repository=factory.bank_transaction_repository())

    async def execute(self, transaction_id: UUID) -> BankTransaction:
        transaction = await self._transaction_repo.find_by_id(transaction_id)
        if transaction is None:
            raise BankTransactionNotFoundError(transaction_id)
        return transaction


class ListBankTransactionsQuery:
    """List transactions, newest first, filtered by account/status/date/amount."""

    def __init__(self, transaction_repository: BankTransactionRepository):
        self._transaction_repo = transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListBankTransactionsQuery:
        return cls(transaction_repository=factory.bank_transaction_repository())

    async def execute(  # noqa: PLR0913
        self,
        bank_account_id: Optional[UUID] = None,
        status: Optional[TransactionStatus] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        limit: Optional[int] = DEFAULT_TRANSACTION_LIMIT,
    ) -> list[BankTransaction]:
        criteria = TransactionFilter(
            bank_account_id=bank_account_id,
            status=status,
            from_date=from_date,
            to_date=to_date,
            min_amount=min_amount,
            max_amount=max_amount,
            limit=limit,
        )
        return await self._transaction_repo.find_all(criteria)
