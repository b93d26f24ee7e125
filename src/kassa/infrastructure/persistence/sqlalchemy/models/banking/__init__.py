"""Banking SQLAlchemy models."""

from kassa.infrastructure.persistence.sqlalchemy.models.banking.bank_account_model import (  # NOQA: E501
    BankAccountModel,
)
from kassa.infrastructure.persistence.sqlalchemy.models.banking.bank_reconciliation_model import (  # NOQA: E501
    BankReconciliationModel,
)
from kassa.infrastructure.persistence.sqlalchemy.models.banking.bank_statement_import_model import (  # NOQA: E501
    BankStatementImportModel,
)
from kassa.infrastructure.persistence.sqlalchemy.models.banking.bank_transaction_model import (  # NOQA: E501
    BankTransactionModel,
)
from kassa.infrastructure.persistence.sqlalchemy.models.banking.payment_model import (
    PaymentModel,
)

__all__ = [
    "BankAccountModel",
    "BankReconciliationModel",
    "BankStatementImportModel",
    "BankTransactionModel",
    "PaymentModel",
]
