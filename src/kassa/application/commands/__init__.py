"""Command layer - write operations that mutate state.

Commands represent user intentions to change system state. They
orchestrate domain services and repositories and return entities or
result DTOs. Committing is left to the presentation layer.

Commands are organized by domain:
- banking: Bank accounts, statement imports, matching and reconciliation
"""

from kassa.application.commands.banking import (
    AddTransactionToReconciliationCommand,
    AutoMatchTransactionsCommand,
    CompleteReconciliationCommand,
    CreateBankAccountCommand,
    CreatePaymentFromTransactionCommand,
    DeleteBankAccountCommand,
    ImportStatementCommand,
    ImportTransactionRowsCommand,
    MatchTransactionCommand,
    OpenReconciliationCommand,
    PaymentCreationResult,
    UnmatchTransactionCommand,
    UpdateBankAccountCommand,
)

__all__ = [
    "AddTransactionToReconciliationCommand",
    "AutoMatchTransactionsCommand",
    "CompleteReconciliationCommand",
    "CreateBankAccountCommand",
    "CreatePaymentFromTransactionCommand",
    "DeleteBankAccountCommand",
    "ImportStatementCommand",
    "ImportTransactionRowsCommand",
    "MatchTransactionCommand",
    "OpenReconciliationCommand",
    "PaymentCreationResult",
    "UnmatchTransactionCommand",
    "UpdateBankAccountCommand",
]
