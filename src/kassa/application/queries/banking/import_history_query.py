"""Import history of a bank account."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from kassa.domain.banking.entities import BankStatementImport
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.repositories import (
    IMPORT_HISTORY_LIMIT,
    BankAccountRepository,
    BankStatementImportRepository,
)

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory


class ImportHistoryQuery:
    """Latest import audit records of an account, newest first."""

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        import_repository: BankStatementImportRepository,
    ):
        self._account_repo = bank_account_repository
        self._import_repo = import_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ImportHistoryQuery:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            import_repository=factory.statement_import_repository(),
        )

    async def execute(
        self,
        account_id: UUID,
        limit: int = IMPORT_HISTORY_LIMIT,
    ) -> list[BankStatementImport]:
        if await self._account_repo.find_by_id(account_id) is None:
            raise BankAccountNotFoundError(account_id)
        return await self._import_repo.find_by_account(
            account_id,
            limit=min(limit, IMPORT_HISTORY_LIMIT),
        )
