"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from kassa.domain.banking.repositories import (
    BankAccountRepository,
    BankReconciliationRepository,
    BankStatementImportRepository,
    BankTransactionRepository,
    PaymentRepository,
)

if TYPE_CHECKING:
    from kassa.application.context import TenantContext


class RepositoryFactory(Protocol):
    """Protocol for creating tenant-scoped repositories."""

    @property
    def tenant(self) -> TenantContext:
        """Get the tenant scope every repository is bound to."""
        ...

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        Use this for commit/rollback at the presentation layer.
        """
        ...

    def bank_account_repository(self) -> BankAccountRepository:
        """Get bank account repository."""
        ...

    def bank_transaction_repository(self) -> BankTransactionRepository:
        """Get bank transaction repository."""
        ...

    def reconciliation_repository(self) -> BankReconciliationRepository:
        """Get reconciliation session repository."""
        ...

    def statement_import_repository(self) -> BankStatementImportRepository:
        """Get statement import audit repository."""
        ...

    def payment_repository(self) -> PaymentRepository:
        """Get payment repository."""
        ...
