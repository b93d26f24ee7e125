"""Bank transaction entity."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from kassa.domain.banking.exceptions import TransactionStateConflictError
from kassa.domain.banking.value_objects import StatementLine, TransactionStatus
from kassa.domain.shared.time import utc_now


class BankTransaction:
    """
    A single line of a bank statement, imported into an account.

    Status rules:
    - UNMATCHED: no payment linked
    - MATCHED: a payment is linked; may already be tagged with a session
    - RECONCILED: matched and locked by a completed reconciliation session

    RECONCILED is never reached from UNMATCHED and reconciled transactions
    are immutable.
    """

    def __init__(  # noqa: PLR0913
        self,
        tenant_id: UUID,
        bank_account_id: UUID,
        transaction_date: date,
        amount: Decimal,
        currency: str,
        value_date: Optional[date] = None,
        description: str = "",
        reference: str = "",
        counterparty_name: str = "",
        counterparty_account: str = "",
        external_id: str = "",
        status: TransactionStatus = TransactionStatus.UNMATCHED,
        matched_payment_id: Optional[UUID] = None,
        matched_at: Optional[datetime] = None,
        journal_entry_id: Optional[UUID] = None,
        reconciliation_id: Optional[UUID] = None,
        import_id: Optional[UUID] = None,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        imported_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._tenant_id = tenant_id
        self._bank_account_id = bank_account_id
        self._transaction_date = transaction_date
        self._value_date = value_date
        self._amount = amount
        self._currency = currency
        self._description = description
        self._reference = reference
        self._counterparty_name = counterparty_name
        self._counterparty_account = counterparty_account
        self._external_id = external_id
        self._status = status
        self._matched_payment_id = matched_payment_id
        self._matched_at = matched_at
        self._journal_entry_id = journal_entry_id
        self._reconciliation_id = reconciliation_id
        self._import_id = import_id
        self._imported_at = imported_at or utc_now()

        self._validate()

    @classmethod
    def from_statement_line(
        cls,
        line: StatementLine,
        tenant_id: UUID,
        bank_account_id: UUID,
        currency: str,
        import_id: Optional[UUID] = None,
    ) -> "BankTransaction":
        return cls(
            tenant_id=tenant_id,
            bank_account_id=bank_account_id,
            transaction_date=line.transaction_date,
            value_date=line.value_date,
            amount=line.amount,
            currency=currency,
            description=line.description,
            reference=line.reference,
            counterparty_name=line.counterparty_name,
            counterparty_account=line.counterparty_account,
            external_id=line.external_id,
            import_id=import_id,
        )

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def tenant_id(self) -> UUID:
        return self._tenant_id

    @property
    def bank_account_id(self) -> UUID:
        return self._bank_account_id

    @property
    def transaction_date(self) -> date:
        return self._transaction_date

    @property
    def value_date(self) -> Optional[date]:
        return self._value_date

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def description(self) -> str:
        return self._description

    @property
    def reference(self) -> str:
        return self._reference

    @property
    def counterparty_name(self) -> str:
        return self._counterparty_name

    @property
    def counterparty_account(self) -> str:
        return self._counterparty_account

    @property
    def external_id(self) -> str:
        return self._external_id

    @property
    def status(self) -> TransactionStatus:
        return self._status

    @property
    def matched_payment_id(self) -> Optional[UUID]:
        return self._matched_payment_id

    @property
    def matched_at(self) -> Optional[datetime]:
        return self._matched_at

    @property
    def journal_entry_id(self) -> Optional[UUID]:
        return self._journal_entry_id

    @property
    def reconciliation_id(self) -> Optional[UUID]:
        return self._reconciliation_id

    @property
    def import_id(self) -> Optional[UUID]:
        return self._import_id

    @property
    def imported_at(self) -> datetime:
        return self._imported_at

    @property
    def is_credit(self) -> bool:
        return self._amount > 0

    def _validate(self) -> None:
        if self._status == TransactionStatus.UNMATCHED and self._matched_payment_id:
            msg = "Unmatched transaction cannot reference a payment"
            raise ValueError(msg)

        if self._status != TransactionStatus.UNMATCHED and not self._matched_payment_id:
            msg = f"{self._status.value} transaction must reference a payment"
            raise ValueError(msg)

        if self._status == TransactionStatus.RECONCILED and not self._reconciliation_id:
            msg = "Reconciled transaction must belong to a reconciliation"
            raise ValueError(msg)

    def match(self, payment_id: UUID) -> None:
        if not self._status.can_match():
            raise TransactionStateConflictError(
                self._id,
                expected_status=TransactionStatus.UNMATCHED.value,
                actual_status=self._status.value,
            )
        self._status = TransactionStatus.MATCHED
        self._matched_payment_id = payment_id
        self._matched_at = utc_now()

    def unmatch(self) -> None:
        if not self._status.can_unmatch():
            raise TransactionStateConflictError(
                self._id,
                expected_status=TransactionStatus.MATCHED.value,
                actual_status=self._status.value,
            )
        self._status = TransactionStatus.UNMATCHED
        self._matched_payment_id = None
        self._matched_at = None

    def assign_to_reconciliation(self, reconciliation_id: UUID) -> None:
        if self._status.is_final():
            raise TransactionStateConflictError(
                self._id,
                expected_status="not reconciled",
                actual_status=self._status.value,
            )
        self._reconciliation_id = reconciliation_id

    def __eq__(self, other) -> bool:
        if not isinstance(other, BankTransaction):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return (
            f"BankTransaction[{self._status.value}]: "
            f"{self._transaction_date.isoformat()} {self._amount} {self._currency}"
        )
