"""Value objects for banking domain."""

from kassa.domain.banking.value_objects.column_mapping import CSVColumnMapping
from kassa.domain.banking.value_objects.match_suggestion import MatchSuggestion
from kassa.domain.banking.value_objects.payment_type import PaymentType
from kassa.domain.banking.value_objects.statement_format import StatementFormat
from kassa.domain.banking.value_objects.statement_line import StatementLine
from kassa.domain.banking.value_objects.transaction_status import (
    ReconciliationStatus,
    TransactionStatus,
)

__all__ = [
    "CSVColumnMapping",
    "MatchSuggestion",
    "PaymentType",
    "ReconciliationStatus",
    "StatementFormat",
    "StatementLine",
    "TransactionStatus",
]
