"""Banking domain SQLAlchemy repositories."""

from kassa.infrastructure.persistence.sqlalchemy.repositories.banking.bank_account_repository import (  # NOQA: E501
    BankAccountRepositorySQLAlchemy,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking.bank_reconciliation_repository import (  # NOQA: E501
    BankReconciliationRepositorySQLAlchemy,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking.bank_statement_import_repository import (  # NOQA: E501
    BankStatementImportRepositorySQLAlchemy,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking.bank_transaction_repository import (  # NOQA: E501
    BankTransactionRepositorySQLAlchemy,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking.payment_repository import (  # NOQA: E501
    PaymentRepositorySQLAlchemy,
)

__all__ = [
    "BankAccountRepositorySQLAlchemy",
    "BankReconciliationRepositorySQLAlchemy",
    "BankStatementImportRepositorySQLAlchemy",
    "BankTransactionRepositorySQLAlchemy",
    "PaymentRepositorySQLAlchemy",
]
