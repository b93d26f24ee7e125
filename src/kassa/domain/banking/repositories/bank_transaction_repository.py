"""Repository interface for bank transactions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from kassa.domain.banking.entities import BankTransaction
from kassa.domain.banking.value_objects import StatementLine, TransactionStatus


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria for listing bank transactions. Unset fields do not filter."""

    bank_account_id: Optional[UUID] = None
    status: Optional[TransactionStatus] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    limit: Optional[int] = None


class BankTransactionRepository(ABC):
    """Repository for imported bank transactions.

    Status changes are conditional writes: they only apply while the row is
    in the expected status and report whether they did. Two writers racing
    for the same row therefore cannot both succeed.
    """

    @abstractmethod
    async def add(self, transaction: BankTransaction) -> None:
        """
        Persist a new transaction.

        Parameters
        ----------
        transaction
            The transaction to insert (normally UNMATCHED)
        """

    @abstractmethod
    async def find_by_id(self, transaction_id: UUID) -> Optional[BankTransaction]:
        """
        Find a transaction by ID.

        Parameters
        ----------
        transaction_id
            The UUID of the transaction

        Returns
        -------
        Bank transaction if found, None otherwise
        """

    @abstractmethod
    async def find_all(self, criteria: TransactionFilter) -> list[BankTransaction]:
        """Transactions matching ``criteria``, newest first."""

    @abstractmethod
    async def exists_duplicate(self, bank_account_id: UUID, line: StatementLine) -> bool:
        """
        Whether ``line`` was already imported into the account.

        With an external id only that id is compared. Without one, a
        transaction with the same date, amount and description counts.

        Parameters
        ----------
        bank_account_id
            Account the line is about to be imported into
        line
            Parsed statement line

        Returns
        -------
        True if an equivalent transaction exists
        """

    @abstractmethod
    async def mark_matched(self, transaction_id: UUID, payment_id: UUID) -> bool:
        """
        Link a payment and move UNMATCHED -> MATCHED.

        Returns
        -------
        False if the transaction was not UNMATCHED at write time
        """

    @abstractmethod
    async def mark_unmatched(self, transaction_id: UUID) -> bool:
        """
        Drop the payment link and move MATCHED -> UNMATCHED.

        Returns
        -------
        False if the transaction was not MATCHED at write time
        """

    @abstractmethod
    async def assign_reconciliation(
        self,
        transaction_id: UUID,
        reconciliation_id: UUID,
    ) -> bool:
        """Tag a non-reconciled transaction with a session; status is unchanged."""

    @abstractmethod
    async def reconcile_matched(self, reconciliation_id: UUID) -> int:
        """
        Promote MATCHED transactions tagged with the session to RECONCILED.

        Parameters
        ----------
        reconciliation_id
            The session being completed

        Returns
        -------
        Number of promoted transactions
        """

    @abstractmethod
    async def sum_for_reconciliation(
        self,
        reconciliation_id: UUID,
        statuses: tuple[TransactionStatus, ...],
    ) -> tuple[Decimal, int]:
        """Sum and count of tagged transactions in the given statuses."""
