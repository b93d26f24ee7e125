"""Link and unlink bank transactions and payments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from kassa.domain.banking.entities import BankTransaction
from kassa.domain.banking.exceptions import (
    BankTransactionNotFoundError,
    PaymentNotFoundError,
    TransactionStateConflictError,
)
from kassa.domain.banking.repositories import (
    BankTransactionRepository,
    PaymentRepository,
)
from kassa.domain.banking.value_objects import TransactionStatus

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


async def _load_transaction(
    repository: BankTransactionRepository,
    transaction_id: UUID,
) -> BankTransaction:
    transaction = await repository.find_by_id(transaction_id)
    if transaction is None:
        raise BankTransactionNotFoundError(transaction_id)
    return transaction


class MatchTransactionCommand:
    """Link an UNMATCHED transaction to a payment.

    The status check is repeated by the conditional write, so of two
    concurrent calls on the same transaction only one can succeed; the other
    gets a state conflict.
    """

    def __init__(
        self,
        transaction_repository: BankTransactionRepository,
        payment_repository: PaymentRepository,
    ):
        self._transaction_repo = transaction_repository
        self._payment_repo = payment_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> MatchTransactionCommand:
        return cls(
            transaction_repository=factory.bank_transaction_repository(),
            payment_repository=factory.payment_repository(),
        )

    async def execute(self, transaction_id: UUID, payment_id: UUID) -> BankTransaction:
        transaction = await _load_transaction(self._transaction_repo, transaction_id)
        if not transaction.status.can_match():
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.UNMATCHED.value,
                actual_status=transaction.status.value,
            )

        payment = await self._payment_repo.find_by_id(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)

        if not await self._transaction_repo.mark_matched(transaction.id, payment.id):
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.UNMATCHED.value,
            )

        transaction.match(payment.id)
        logger.info(
            "Matched bank transaction %s to payment %s",
            transaction.id,
            payment.payment_number,
        )
        return transaction


class UnmatchTransactionCommand:
    """Drop the payment link of a MATCHED transaction.

    Reconciled transactions are locked and cannot be unmatched.
    """

    def __init__(self, transaction_repository: BankTransactionRepository):
        self._transaction_repo = transaction_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> UnmatchTransactionCommand:
        return cls(transaction_repository=factory.bank_transaction_repository())

    async def execute(self, transaction_id: UUID) -> BankTransaction:
        transaction = await _load_transaction(self._transaction_repo, transaction_id)
        if not transaction.status.can_unmatch():
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.MATCHED.value,
                actual_status=transaction.status.value,
            )

        if not await self._transaction_repo.mark_unmatched(transaction.id):
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.MATCHED.value,
            )

        transaction.unmatch()
        logger.info("Unmatched bank transaction %s", transaction.id)
        return transaction
