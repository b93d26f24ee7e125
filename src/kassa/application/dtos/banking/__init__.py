"""Banking DTOs."""

from kassa.application.dtos.banking.bank_account_view import BankAccountView
from kassa.application.dtos.banking.import_result import ImportResult
from kassa.application.dtos.banking.reconciliation_summary import (
    ReconciliationSummary,
)
from kassa.application.dtos.banking.statement_preview import (
    RowIssue,
    StatementPreview,
)

__all__ = [
    "BankAccountView",
    "ImportResult",
    "ReconciliationSummary",
    "RowIssue",
    "StatementPreview",
]
