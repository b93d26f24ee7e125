"""Payment entity, as seen by the reconciliation engine."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from kassa.domain.banking.value_objects import PaymentType

if TYPE_CHECKING:
    from kassa.domain.banking.entities.bank_transaction import BankTransaction


class Payment:
    """A payment recorded in the ledger, candidate for matching.

    Payments are owned by the invoicing side of the platform. The banking
    context reads them, and creates one only when a bank transaction has no
    recorded counterpart.
    """

    def __init__(  # noqa: PLR0913
        self,
        tenant_id: UUID,
        payment_number: str,
        payment_type: PaymentType,
        payment_date: date,
        amount: Decimal,
        currency: str,
        reference: Optional[str] = None,
        contact_name: Optional[str] = None,
        allocated_amount: Decimal = Decimal("0"),
        notes: Optional[str] = None,
        created_by: Optional[UUID] = None,
        id: Optional[UUID] = None,
    ):
        self.id = id or uuid4()
        self.tenant_id = tenant_id
        self.payment_number = payment_number
        self.payment_type = payment_type
        self.payment_date = payment_date
        self.amount = amount
        self.currency = currency
        self.reference = reference
        self.contact_name = contact_name
        self.allocated_amount = allocated_amount
        self.notes = notes
        self.created_by = created_by

    @property
    def unallocated_amount(self) -> Decimal:
        return self.amount - self.allocated_amount

    @classmethod
    def from_bank_transaction(
        cls,
        transaction: BankTransaction,
        payment_number: str,
        created_by: Optional[UUID] = None,
    ) -> Payment:
        payment_type = PaymentType.for_amount(transaction.amount)
        return cls(
            tenant_id=transaction.tenant_id,
            payment_number=payment_number,
            payment_type=payment_type,
            payment_date=transaction.transaction_date,
            amount=abs(transaction.amount),
            currency=transaction.currency,
            reference=transaction.reference or None,
            contact_name=transaction.counterparty_name or None,
            notes=f"Created from bank transaction: {transaction.description}",
            created_by=created_by,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Payment):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Payment({self.payment_number}, {self.payment_type.value}, {self.amount})"


def format_payment_number(payment_type: PaymentType, sequence: int) -> str:
    """``PMT-000001`` for received payments, ``PAY-000001`` for made ones."""
    return f"{payment_type.number_prefix}-{sequence:06d}"
