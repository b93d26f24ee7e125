"""Data Transfer Objects for presentation layer.

DTOs decouple the presentation layer from domain models,
providing stable interfaces for API endpoints and the CLI.

DTOs are organized by domain:
- banking: Import results, account views, previews and reconciliation summaries
"""

from kassa.application.dtos.banking import (
    BankAccountView,
    ImportResult,
    ReconciliationSummary,
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
