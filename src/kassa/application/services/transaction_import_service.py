"""Application service for persisting parsed statement lines.

Both import commands (CSV statements and pre-parsed JSON rows) feed their
lines through this service, so duplicate detection, tallying and the audit
record work the same way regardless of the input shape.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from kassa.application.dtos.banking import ImportResult
from kassa.domain.banking.entities import (
    BankAccount,
    BankStatementImport,
    BankTransaction,
)
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.repositories import (
    BankAccountRepository,
    BankStatementImportRepository,
    BankTransactionRepository,
)
from kassa.domain.banking.value_objects import StatementLine

if TYPE_CHECKING:
    from kassa.application.context import TenantContext
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class TransactionImportService:
    """Turn statement lines into bank transactions of one account."""

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        transaction_repository: BankTransactionRepository,
        import_repository: BankStatementImportRepository,
        tenant: TenantContext,
    ):
        self._account_repo = bank_account_repository
        self._transaction_repo = transaction_repository
        self._import_repo = import_repository
        self._tenant = tenant

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> TransactionImportService:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            transaction_repository=factory.bank_transaction_repository(),
            import_repository=factory.statement_import_repository(),
            tenant=factory.tenant,
        )

    async def load_account(self, account_id: UUID) -> BankAccount:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)
        return account

    @staticmethod
    def start(file_name: Optional[str] = None) -> ImportResult:
        return ImportResult(import_id=uuid4(), file_name=file_name)

    async def import_line(
        self,
        account: BankAccount,
        line: StatementLine,
        result: ImportResult,
        skip_duplicates: bool = True,
    ) -> Optional[BankTransaction]:
        """
        Persist one line unless it duplicates an existing transaction.

        Parameters
        ----------
        account
            Account the statement belongs to
        line
            Parsed statement line
        result
            Running tally of the import, updated in place
        skip_duplicates
            Skip lines equivalent to an already imported transaction

        Returns
        -------
        The new transaction, or None if the line was skipped as a duplicate
        """
        if skip_duplicates and await self._transaction_repo.exists_duplicate(
            account.id,
            line,
        ):
            result.duplicates_skipped += 1
            return None

        transaction = BankTransaction.from_statement_line(
            line,
            tenant_id=self._tenant.tenant_id,
            bank_account_id=account.id,
            currency=account.currency,
            import_id=result.import_id,
        )
        # Flushed by the repository, so later lines of the same file see it
        await self._transaction_repo.add(transaction)
        result.transactions_imported += 1
        return transaction

    async def finish(
        self,
        account: BankAccount,
        result: ImportResult,
        file_format: str = "CSV",
    ) -> BankStatementImport:
        """Write the audit record of the run."""
        statement_import = BankStatementImport(
            tenant_id=self._tenant.tenant_id,
            bank_account_id=account.id,
            file_name=result.file_name or "",
            transactions_imported=result.transactions_imported,
            transactions_matched=result.transactions_matched,
            duplicates_skipped=result.duplicates_skipped,
            errors=tuple(result.errors),
            file_format=file_format,
            created_by=self._tenant.user_id,
            id=result.import_id,
        )
        await self._import_repo.add(statement_import)

        logger.info(
            "Import %s into account %s: %d imported, %d duplicate(s), "
            "%d matched, %d row error(s)",
            result.import_id,
            account.id,
            result.transactions_imported,
            result.duplicates_skipped,
            result.transactions_matched,
            len(result.errors),
        )
        return statement_import
