"""Repository interfaces for banking domain."""

from kassa.domain.banking.repositories.bank_account_repository import (
    BankAccountRepository,
)
from kassa.domain.banking.repositories.bank_reconciliation_repository import (
    BankReconciliationRepository,
)
from kassa.domain.banking.repositories.bank_statement_import_repository import (
    IMPORT_HISTORY_LIMIT,
    BankStatementImportRepository,
)
from kassa.domain.banking.repositories.bank_transaction_repository import (
    BankTransactionRepository,
    TransactionFilter,
)
from kassa.domain.banking.repositories.payment_repository import (
    CANDIDATE_LIMIT,
    PaymentRepository,
)

__all__ = [
    "CANDIDATE_LIMIT",
    "IMPORT_HISTORY_LIMIT",
    "BankAccountRepository",
    "BankReconciliationRepository",
    "BankStatementImportRepository",
    "BankTransactionRepository",
    "PaymentRepository",
    "TransactionFilter",
]
