"""Repository interface for payments used in matching."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from kassa.domain.banking.entities import Payment
from kassa.domain.banking.value_objects import PaymentType

CANDIDATE_LIMIT = 20


class PaymentRepository(ABC):
    """Access to the tenant's recorded payments."""

    @abstractmethod
    async def find_by_id(self, payment_id: UUID) -> Optional[Payment]:
        """Find a payment by ID, None if unknown to the tenant."""

    @abstractmethod
    async def find_match_candidates(
        self,
        amount: Decimal,
        payment_type: PaymentType,
        tolerance: Decimal,
        limit: int = CANDIDATE_LIMIT,
    ) -> list[Payment]:
        """
        Payments that could explain a bank transaction of ``amount``.

        Only payments with an unallocated remainder, not yet linked to any
        bank transaction, of the given direction and within ``tolerance``
        (relative) of ``amount`` qualify.

        Parameters
        ----------
        amount
            Absolute transaction amount
        payment_type
            RECEIVED for inflows, MADE for outflows
        tolerance
            Allowed relative deviation, e.g. ``Decimal("0.05")``
        limit
            Maximum number of candidates, closest amount first

        Returns
        -------
        Candidate payments
        """

    @abstractmethod
    async def add(self, payment: Payment) -> None:
        """Persist a new payment."""

    @abstractmethod
    async def next_sequence(self, payment_type: PaymentType) -> int:
        """Next free number for ``PMT-``/``PAY-`` payment numbers."""
