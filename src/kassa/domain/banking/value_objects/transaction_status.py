"""Status enumerations for bank transactions and reconciliations."""

from enum import Enum


class TransactionStatus(str, Enum):
    """Match state of an imported bank transaction.

    UNMATCHED -> MATCHED -> RECONCILED. RECONCILED is terminal and is only
    reached by completing the reconciliation the transaction is tagged with.
    """

    UNMATCHED = "UNMATCHED"
    MATCHED = "MATCHED"
    RECONCILED = "RECONCILED"

    def can_match(self) -> bool:
        return self == TransactionStatus.UNMATCHED

    def can_unmatch(self) -> bool:
        return self == TransactionStatus.MATCHED

    def is_final(self) -> bool:
        return self == TransactionStatus.RECONCILED


class ReconciliationStatus(str, Enum):
    """Lifecycle of a reconciliation session."""

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    def is_final(self) -> bool:
        return self == ReconciliationStatus.COMPLETED
