"""Read bank accounts together with their derived balances."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.application.dtos.banking import BankAccountView
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.repositories import BankAccountRepository

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory


class GetBankAccountQuery:
    """Load one bank account and compute its balance."""

    def __init__(self, bank_account_repository: BankAccountRepository):
        self._account_repo = bank_account_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> GetBankAccountQuery:
        return cls(bank_account_repository=factory.bank_account_repository())

    async def execute(self, account_id: UUID) -> BankAccountView:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)
        balance = await self._account_repo.calculate_balance(account.id)
        return BankAccountView(account=account, balance=balance)

    async def balance(self, account_id: UUID) -> Decimal:
        """Ledger sum of the account; unknown accounts raise not-found."""
        view = await self.execute(account_id)
        return view.balance


class ListBankAccountsQuery:
    """List bank accounts, default first, each with its balance."""

    def __init__(self, bank_account_repository: BankAccountRepository):
        self._account_repo = bank_account_repository

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ListBankAccountsQuery:
        return cls(bank_account_repository=factory.bank_account_repository())

    async def execute(
        self,
        is_active: Optional[bool] = None,
        currency: Optional[str] = None,
    ) -> list[BankAccountView]:
        accounts = await self._account_repo.find_all(
            is_active=is_active,
            currency=currency.upper() if currency else None,
        )
        return [
            BankAccountView(
                account=account,
                balance=await self._account_repo.calculate_balance(account.id),
            )
            for account in accounts
        ]
