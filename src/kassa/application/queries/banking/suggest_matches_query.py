"""Suggest payments that could explain a bank transaction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.domain.banking.entities import BankTransaction
from kassa.domain.banking.exceptions import BankTransactionNotFoundError
from kassa.domain.banking.repositories import (
    BankTransactionRepository,
    PaymentRepository,
)
from kassa.domain.banking.services import (
    DEFAULT_MATCHER_CONFIG,
    MAX_SUGGESTIONS,
    MatcherConfig,
    rank_payments,
)
from kassa.domain.banking.value_objects import MatchSuggestion, PaymentType

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class SuggestMatchesQuery:
    """Rank payment candidates for one unmatched transaction."""

    def __init__(
        self,
        transaction_repository: BankTransactionRepository,
        payment_repository: PaymentRepository,
        matcher_config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
    ):
        self._transaction_repo = transaction_repository
        self._payment_repo = payment_repository
        self._config = matcher_config

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        matcher_config: Optional[MatcherConfig] = None,
    ) -> SuggestMatchesQuery:
        return cls(
            transaction_repository=factory.bank_transaction_repository(),
            payment_repository=factory.payment_repository(),
            matcher_config=matcher_config or DEFAULT_MATCHER_CONFIG,
        )

    async def execute(
        self,
        transaction_id: UUID,
        limit: int = MAX_SUGGESTIONS,
    ) -> list[MatchSuggestion]:
        transaction = await self._transaction_repo.find_by_id(transaction_id)
        if transaction is None:
            raise BankTransactionNotFoundError(transaction_id)
        return await self.suggest_for(transaction, limit=limit)

    async def suggest_for(
        self,
        transaction: BankTransaction,
        limit: int = MAX_SUGGESTIONS,
    ) -> list[MatchSuggestion]:
        """Suggestions for an already loaded transaction.

        Only UNMATCHED transactions get suggestions; anything else yields an
        empty list.
        """
        if not transaction.status.can_match():
            return []

        candidates = await self._payment_repo.find_match_candidates(
            amount=abs(transaction.amount),
            payment_type=PaymentType.for_amount(transaction.amount),
            tolerance=self._config.amount_tolerance,
        )
        suggestions = rank_payments(transaction, candidates, self._config, limit)
        logger.debug(
            "Transaction %s: %d candidate(s), %d suggestion(s)",
            transaction.id,
            len(candidates),
            len(suggestions),
        )
        return suggestions
