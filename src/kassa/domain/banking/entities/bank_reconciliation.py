"""Bank reconciliation session entity."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from kassa.domain.banking.exceptions import ReconciliationStateConflictError
from kassa.domain.banking.value_objects import ReconciliationStatus
from kassa.domain.shared.time import utc_now


class BankReconciliation:
    """
    A bounded period of work tying a statement to matched transactions.

    The session starts IN_PROGRESS and ends COMPLETED; there is no way back.
    The opening/closing balances are declared by the caller and the tie-out
    against transaction amounts is advisory.
    """

    def __init__(  # noqa: PLR0913
        self,
        tenant_id: UUID,
        bank_account_id: UUID,
        statement_date: date,
        opening_balance: Decimal,
        closing_balance: Decimal,
        created_by: Optional[UUID] = None,
        notes: Optional[str] = None,
        status: ReconciliationStatus = ReconciliationStatus.IN_PROGRESS,
        reconciled_balance: Optional[Decimal] = None,
        completed_at: Optional[datetime] = None,
        completed_by: Optional[UUID] = None,
        # For reconstitution from persistence:
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ):
        self._id = id or uuid4()
        self._tenant_id = tenant_id
        self._bank_account_id = bank_account_id
        self._statement_date = statement_date
        self._opening_balance = opening_balance
        self._closing_balance = closing_balance
        self._created_by = created_by
        self._notes = notes
        self._status = status
        self._reconciled_balance = reconciled_balance
        self._completed_at = completed_at
        self._completed_by = completed_by
        self._created_at = created_at or utc_now()

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
    def statement_date(self) -> date:
        return self._statement_date

    @property
    def opening_balance(self) -> Decimal:
        return self._opening_balance

    @property
    def closing_balance(self) -> Decimal:
        return self._closing_balance

    @property
    def created_by(self) -> Optional[UUID]:
        return self._created_by

    @property
    def notes(self) -> Optional[str]:
        return self._notes

    @property
    def status(self) -> ReconciliationStatus:
        return self._status

    @property
    def reconciled_balance(self) -> Optional[Decimal]:
        return self._reconciled_balance

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def completed_by(self) -> Optional[UUID]:
        return self._completed_by

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def expected_movement(self) -> Decimal:
        """Net amount the statement says moved during the period."""
        return self._closing_balance - self._opening_balance

    def is_in_progress(self) -> bool:
        return self._status == ReconciliationStatus.IN_PROGRESS

    def ensure_in_progress(self) -> None:
        if not self.is_in_progress():
            raise ReconciliationStateConflictError(self._id)

    def complete(
        self,
        reconciled_balance: Decimal,
        completed_by: Optional[UUID] = None,
    ) -> None:
        self.ensure_in_progress()
        self._status = ReconciliationStatus.COMPLETED
        self._reconciled_balance = reconciled_balance
        self._completed_by = completed_by
        self._completed_at = utc_now()

    def __eq__(self, other) -> bool:
        if not isinstance(other, BankReconciliation):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return (
            f"BankReconciliation[{self._status.value}]: "
            f"{self._statement_date.isoformat()}"
        )
