"""Delete bank accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from kassa.domain.banking.exceptions import (
    BankAccountInUseError,
    BankAccountNotFoundError,
)
from kassa.domain.banking.repositories import BankAccountRepository

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class DeleteBankAccountCommand:
    """Delete a bank account that owns no transactions."""

    def __init__(self, bank_account_repository: BankAccountRepository):
        self._account_repo = bank_account_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> DeleteBankAccountCommand:
        return cls(bank_account_repository=factory.bank_account_repository())

    async def execute(self, account_id: UUID) -> None:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)

        transaction_count = await self._account_repo.count_transactions(account_id)
        if transaction_count:
            raise BankAccountInUseError(account_id, transaction_count)

        await self._account_repo.delete(account_id)
        logger.info("Deleted bank account %s", account_id)
