"""DTO for the advisory balance tie-out of a reconciliation."""

from dataclasses import dataclass
from decimal import Decimal

from kassa.domain.banking.entities import BankReconciliation


@dataclass(frozen=True)
class ReconciliationSummary:
    """Declared statement balances next to what the tagged transactions add up to.

    Informational only: completing a session does not require
    ``is_balanced``.
    """

    reconciliation: BankReconciliation
    matched_total: Decimal
    matched_count: int
    unmatched_count: int

    @property
    def computed_closing_balance(self) -> Decimal:
        return self.reconciliation.opening_balance + self.matched_total

    @property
    def difference(self) -> Decimal:
        return self.reconciliation.closing_balance - self.computed_closing_balance

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0
