"""SQLAlchemy models for persistence layer."""

from kassa.infrastructure.persistence.sqlalchemy.models.banking import (
    BankAccountModel,
    BankReconciliationModel,
    BankStatementImportModel,
    BankTransactionModel,
    PaymentModel,
)
from kassa.infrastructure.persistence.sqlalchemy.models.base import Base

__all__ = [
    "Base",
    "BankAccountModel",
    "BankReconciliationModel",
    "BankStatementImportModel",
    "BankTransactionModel",
    "PaymentModel",
]
