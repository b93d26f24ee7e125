"""Record a payment for a bank transaction that has none."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from kassa.domain.banking.entities import (
    BankTransaction,
    Payment,
    format_payment_number,
)
from kassa.domain.banking.exceptions import (
    BankTransactionNotFoundError,
    TransactionStateConflictError,
)
from kassa.domain.banking.repositories import (
    BankTransactionRepository,
    PaymentRepository,
)
from kassa.domain.banking.value_objects import PaymentType, TransactionStatus

if TYPE_CHECKING:
    from kassa.application.context import TenantContext
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


@dataclass
class PaymentCreationResult:
    """The new payment and the transaction it is now matched to."""

    payment: Payment
    transaction: BankTransaction


class CreatePaymentFromTransactionCommand:
    """Create a payment mirroring an UNMATCHED transaction and match the two.

    Inflows become RECEIVED payments numbered ``PMT-nnnnnn``, outflows MADE
    payments numbered ``PAY-nnnnnn``. Both writes belong to the caller's
    unit of work.
    """

    def __init__(
        self,
        transaction_repository: BankTransactionRepository,
        payment_repository: PaymentRepository,
        tenant: TenantContext,
    ):
        self._transaction_repo = transaction_repository
        self._payment_repo = payment_repository
        self._tenant = tenant

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
    ) -> CreatePaymentFromTransactionCommand:
        return cls(
            transaction_repository=factory.bank_transaction_repository(),
            payment_repository=factory.payment_repository(),
            tenant=factory.tenant,
        )

    async def execute(self, transaction_id: UUID) -> PaymentCreationResult:
        transaction = await self._transaction_repo.find_by_id(transaction_id)
        if transaction is None:
            raise BankTransactionNotFoundError(transaction_id)
        if not transaction.status.can_match():
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.UNMATCHED.value,
                actual_status=transaction.status.value,
            )

        payment_type = PaymentType.for_amount(transaction.amount)
        sequence = await self._payment_repo.next_sequence(payment_type)
        payment = Payment.from_bank_transaction(
            transaction,
            payment_number=format_payment_number(payment_type, sequence),
            created_by=self._tenant.user_id,
        )
        await self._payment_repo.add(payment)

        if not await self._transaction_repo.mark_matched(transaction.id, payment.id):
            raise TransactionStateConflictError(
                transaction.id,
                expected_status=TransactionStatus.UNMATCHED.value,
            )
        transaction.match(payment.id)

        logger.info(
            "Created payment %s from bank transaction %s",
            payment.payment_number,
            transaction.id,
        )
        return PaymentCreationResult(payment=payment, transaction=transaction)
