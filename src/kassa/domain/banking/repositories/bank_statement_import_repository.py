"""Repository interface for statement import audit records."""

from abc import ABC, abstractmethod
from uuid import UUID

from kassa.domain.banking.entities import BankStatementImport

IMPORT_HISTORY_LIMIT = 50


class BankStatementImportRepository(ABC):
    """Append-only store of import runs."""

    @abstractmethod
    async def add(self, statement_import: BankStatementImport) -> None:
        """Persist the audit record of a finished run."""

    @abstractmethod
    async def find_by_account(
        self,
        bank_account_id: UUID,
        limit: int = IMPORT_HISTORY_LIMIT,
    ) -> list[BankStatementImport]:
        """Latest runs for the account, newest first."""

    @abstractmethod
    async def add_matched_to_latest(self, bank_account_id: UUID, matched: int) -> bool:
        """
        Credit auto-matched transactions to the account's latest run.

        Returns
        -------
        False if the account has no import yet
        """
