"""Repository interface for reconciliation sessions."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from kassa.domain.banking.entities import BankReconciliation


class BankReconciliationRepository(ABC):
    """Repository for reconciliation sessions."""

    @abstractmethod
    async def add(self, reconciliation: BankReconciliation) -> None:
        """Persist a new IN_PROGRESS session."""

    @abstractmethod
    async def find_by_id(self, reconciliation_id: UUID) -> Optional[BankReconciliation]:
        """
        Find a session by ID.

        Parameters
        ----------
        reconciliation_id
            The UUID of the session

        Returns
        -------
        The session if found, None otherwise
        """

    @abstractmethod
    async def find_by_account(self, bank_account_id: UUID) -> list[BankReconciliation]:
        """Sessions of an account, latest statement date first."""

    @abstractmethod
    async def mark_completed(
        self,
        reconciliation_id: UUID,
        reconciled_balance: Decimal,
        completed_by: Optional[UUID] = None,
    ) -> bool:
        """
        Move IN_PROGRESS -> COMPLETED and stamp the completion.

        Parameters
        ----------
        reconciliation_id
            The session to close
        reconciled_balance
            Opening balance plus the promoted transaction amounts
        completed_by
            Acting user, if known

        Returns
        -------
        False if the session was no longer IN_PROGRESS at write time
        """
