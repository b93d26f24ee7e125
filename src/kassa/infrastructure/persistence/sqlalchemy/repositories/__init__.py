"""SQLAlchemy repository implementations organized by bounded context."""

# Banking domain repositories
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking import (
    BankAccountRepositorySQLAlchemy,
    BankReconciliationRepositorySQLAlchemy,
    BankStatementImportRepositorySQLAlchemy,
    BankTransactionRepositorySQLAlchemy,
    PaymentRepositorySQLAlchemy,
)

# Repository Factory
from kassa.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
    create_matcher_config_from_settings,
)

__all__ = [
    # Factory (recommended for creating repositories)
    "SQLAlchemyRepositoryFactory",
    "create_matcher_config_from_settings",
    # Banking
    "BankAccountRepositorySQLAlchemy",
    "BankReconciliationRepositorySQLAlchemy",
    "BankStatementImportRepositorySQLAlchemy",
    "BankTransactionRepositorySQLAlchemy",
    "PaymentRepositorySQLAlchemy",
]
