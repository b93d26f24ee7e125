"""Update bank accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.domain.banking.entities import BankAccount
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.repositories import BankAccountRepository

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class UpdateBankAccountCommand:
    """Apply a partial update to a bank account.

    Only arguments that are not None are applied. Setting ``is_default`` to
    True clears the flag on every other account of the tenant; setting it
    to False only clears it on this account.
    """

    def __init__(self, bank_account_repository: BankAccountRepository):
        self._account_repo = bank_account_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> UpdateBankAccountCommand:
        return cls(bank_account_repository=factory.bank_account_repository())

    async def execute(  # noqa: PLR0913
        self,
        account_id: UUID,
        name: Optional[str] = None,
        bank_name: Optional[str] = None,
        swift_code: Optional[str] = None,
        gl_account_id: Optional[UUID] = None,
        is_active: Optional[bool] = None,
        is_default: Optional[bool] = None,
    ) -> BankAccount:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)

        if name is not None:
            account.rename(name)
        if bank_name is not None or swift_code is not None:
            account.update_bank_details(bank_name=bank_name, swift_code=swift_code)
        if gl_account_id is not None:
            account.link_gl_account(gl_account_id)
        if is_active is True:
            account.activate()
        elif is_active is False:
            account.deactivate()

        if is_default is True:
            await self._account_repo.clear_default(except_account_id=account.id)
            account.mark_as_default()
        elif is_default is False:
            account.clear_default()

        await self._account_repo.save(account)
        logger.info("Updated bank account %s", account.id)
        return account
