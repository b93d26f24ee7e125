"""Match unmatched transactions to unambiguous payment suggestions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from kassa.application.queries.banking.suggest_matches_query import (
    SuggestMatchesQuery,
)
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.repositories import (
    BankAccountRepository,
    BankStatementImportRepository,
    BankTransactionRepository,
    TransactionFilter,
)
from kassa.domain.banking.services import pick_unambiguous
from kassa.domain.banking.value_objects import TransactionStatus

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory
    from kassa.domain.banking.services import MatcherConfig

logger = logging.getLogger(__name__)

DEFAULT_AUTO_MATCH_CONFIDENCE = 0.7


class AutoMatchTransactionsCommand:
    """Match every UNMATCHED transaction of an account whose best suggestion is clear.

    A suggestion is taken only when it clears ``min_confidence`` and the
    runner-up scores below 90% of it. Each payment is used at most once per
    run.
    """

    def __init__(  # noqa: PLR0913
        self,
        bank_account_repository: BankAccountRepository,
        transaction_repository: BankTransactionRepository,
        import_repository: BankStatementImportRepository,
        suggest_query: SuggestMatchesQuery,
        min_confidence: float = DEFAULT_AUTO_MATCH_CONFIDENCE,
    ):
        self._account_repo = bank_account_repository
        self._transaction_repo = transaction_repository
        self._import_repo = import_repository
        self._suggest_query = suggest_query
        self._min_confidence = min_confidence

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        matcher_config: Optional[MatcherConfig] = None,
        min_confidence: float = DEFAULT_AUTO_MATCH_CONFIDENCE,
    ) -> AutoMatchTransactionsCommand:
        return cls(
            bank_account_repository=factory.bank_account_repository(),
            transaction_repository=factory.bank_transaction_repository(),
            import_repository=factory.statement_import_repository(),
            suggest_query=SuggestMatchesQuery.from_factory(factory, matcher_config),
            min_confidence=min_confidence,
        )

    async def execute(
        self,
        account_id: UUID,
        min_confidence: Optional[float] = None,
    ) -> int:
        """
        Auto-match an account and credit the result to its latest import.

        Parameters
        ----------
        account_id
            Account whose unmatched transactions are processed
        min_confidence
            Override of the configured confidence floor

        Returns
        -------
        Number of transactions matched
        """
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise BankAccountNotFoundError(account_id)

        matched = await self.match_unmatched(account_id, min_confidence)
        if matched:
            await self._import_repo.add_matched_to_latest(account_id, matched)
        return matched

    async def match_unmatched(
        self,
        account_id: UUID,
        min_confidence: Optional[float] = None,
    ) -> int:
        """Match without touching any import record."""
        floor = self._min_confidence if min_confidence is None else min_confidence
        unmatched = await self._transaction_repo.find_all(
            TransactionFilter(
                bank_account_id=account_id,
                status=TransactionStatus.UNMATCHED,
            ),
        )

        used_payments: set[UUID] = set()
        matched = 0
        for transaction in unmatched:
            suggestions = [
                s
                for s in await self._suggest_query.suggest_for(transaction)
                if s.payment_id not in used_payments
            ]
            best = pick_unambiguous(suggestions, floor)
            if best is None:
                continue

            if await self._transaction_repo.mark_matched(
                transaction.id,
                best.payment_id,
            ):
                used_payments.add(best.payment_id)
                matched += 1
                logger.debug(
                    "Auto-matched transaction %s to %s (%.2f: %s)",
                    transaction.id,
                    best.payment_number,
                    best.confidence,
                    best.match_reason,
                )

        logger.info(
            "Auto-match on account %s: %d of %d transaction(s) matched",
            account_id,
            matched,
            len(unmatched),
        )
        return matched
