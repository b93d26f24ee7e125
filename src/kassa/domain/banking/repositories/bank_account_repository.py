"""Repository interface for bank accounts."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from kassa.domain.banking.entities import BankAccount


class BankAccountRepository(ABC):
    """Repository for the tenant's bank accounts.

    Implementations are tenant-scoped: an account of another tenant is
    indistinguishable from a missing one.
    """

    @abstractmethod
    async def save(self, account: BankAccount) -> None:
        """
        Insert or update a bank account.

        Parameters
        ----------
        account
            The account to persist
        """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[BankAccount]:
        """
        Find a bank account by ID.

        Parameters
        ----------
        account_id
            The UUID of the account

        Returns
        -------
        Bank account if found, None otherwise
        """

    @abstractmethod
    async def find_all(
        self,
        is_active: Optional[bool] = None,
        currency: Optional[str] = None,
    ) -> list[BankAccount]:
        """
        List accounts, the default one first and then by name.

        Parameters
        ----------
        is_active
            Only active (True) or inactive (False) accounts; None for all
        currency
            Only accounts held in this currency

        Returns
        -------
        Matching bank accounts
        """

    @abstractmethod
    async def clear_default(self, except_account_id: Optional[UUID] = None) -> int:
        """
        Unset ``is_default`` on every account except the given one.

        Returns
        -------
        Number of accounts that lost the flag
        """

    @abstractmethod
    async def delete(self, account_id: UUID) -> bool:
        """Delete an account. Returns False if it did not exist."""

    @abstractmethod
    async def count_transactions(self, account_id: UUID) -> int:
        """Number of bank transactions owned by the account."""

    @abstractmethod
    async def calculate_balance(self, account_id: UUID) -> Decimal:
        """
        Signed sum of every transaction amount of the account.

        Match and reconciliation status are irrelevant; the value is
        recomputed on every call rather than cached.

        Parameters
        ----------
        account_id
            The account to sum

        Returns
        -------
        The ledger balance, ``Decimal("0")`` for an empty account
        """
