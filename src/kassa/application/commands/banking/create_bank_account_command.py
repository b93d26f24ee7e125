"""Create bank accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.domain.banking.entities import BankAccount
from kassa.domain.banking.repositories import BankAccountRepository

if TYPE_CHECKING:
    from kassa.application.context import TenantContext
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class CreateBankAccountCommand:
    """Create a bank account, taking over the default flag if requested."""

    def __init__(
        self,
        bank_account_repository: BankAccountRepository,
        tenant: TenantContext,
    ):
        self._account_repo = bank_account_repository
        self._tenant = tenant

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> CreateBankAccountCommand:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            tenant=factory.tenant,
        )

    async def execute(  # noqa: PLR0913
        self,
        name: str,
        account_number: str,
        bank_name: Optional[str] = None,
        swift_code: Optional[str] = None,
        currency: Optional[str] = None,
        gl_account_id: Optional[UUID] = None,
        is_default: bool = False,
    ) -> BankAccount:
        account = BankAccount(
            tenant_id=self._tenant.tenant_id,
            name=name,
            account_number=account_number,
            bank_name=bank_name,
            swift_code=swift_code,
            currency=currency,
            gl_account_id=gl_account_id,
            is_default=is_default,
        )

        # Same unit of work: the caller commits both writes or neither
        if account.is_default:
            cleared = await self._account_repo.clear_default(
                except_account_id=account.id,
            )
            if cleared:
                logger.debug("Cleared default flag on %d bank account(s)", cleared)

        await self._account_repo.save(account)
        logger.info("Created bank account %s (%s)", account.id, account.name)
        return account
