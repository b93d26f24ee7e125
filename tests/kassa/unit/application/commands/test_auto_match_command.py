"""Unit tests for AutoMatchTransactionsCommand."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from kassa.application.commands.banking import AutoMatchTransactionsCommand
from kassa.domain.banking.exceptions import BankAccountNotFoundError
from kassa.domain.banking.value_objects import MatchSuggestion, TransactionStatus
from tests.shared.fixtures.factories import make_account, make_transaction


def _suggestion(payment_id, confidence):
    return MatchSuggestion(
        payment_id=payment_id,
        payment_number="PMT-000001",
        payment_date=date(2025, 3, 14),
        amount=Decimal("100.00"),
        confidence=confidence,
        match_reason="exact amount",
    )


@pytest.fixture
def account(tenant):
    return make_account(tenant.tenant_id)


@pytest.fixture
def transactions(tenant, account):
    return [make_transaction(tenant.tenant_id, account.id) for _ in range(3)]


@pytest.fixture
def mock_account_repo(account):
    repo = AsyncMock()
    repo.find_by_id.return_value = account
    return repo


@pytest.fixture
def mock_transaction_repo(transactions):
    repo = AsyncMock()
    repo.find_all.return_value = transactions
    repo.mark_matched.return_value = True
    return repo


@pytest.fixture
def mock_import_repo():
    return AsyncMock()


@pytest.fixture
def mock_suggest_query():
    query = MagicMock()
    query.suggest_for = AsyncMock(return_value=[])
    return query


@pytest.fixture
def command(
    mock_account_repo,
    mock_transaction_repo,
    mock_import_repo,
    mock_suggest_query,
):
    return AutoMatchTransactionsCommand(
        mock_account_repo,
        mock_transaction_repo,
        mock_import_repo,
        mock_suggest_query,
    )


class TestAutoMatchTransactionsCommand:
    """Tests for AutoMatchTransactionsCommand."""

    @pytest.mark.asyncio
    async def test_only_unmatched_transactions_are_loaded(
        self,
        command,
        account,
        mock_transaction_repo,
    ):
        await command.execute(account.id)

        filters = mock_transaction_repo.find_all.await_args.args[0]
        assert filters.bank_account_id == account.id
        assert filters.status == TransactionStatus.UNMATCHED

    @pytest.mark.asyncio
    async def test_clear_suggestions_are_matched(
        self,
        command,
        account,
        transactions,
        mock_transaction_repo,
        mock_import_repo,
        mock_suggest_query,
    ):
        first, second = uuid4(), uuid4()
        mock_suggest_query.suggest_for.side_effect = [
            [_suggestion(first, 0.9)],
            [_suggestion(second, 0.8), _suggestion(uuid4(), 0.75)],
            [_suggestion(first, 0.95)],
        ]

        matched = await command.execute(account.id)

        assert matched == 1
        mock_transaction_repo.mark_matched.assert_awaited_once_with(
            transactions[0].id,
            first,
        )
        mock_import_repo.add_matched_to_latest.assert_awaited_once_with(
            account.id,
            1,
        )

    @pytest.mark.asyncio
    async def test_payment_is_used_once_per_run(
        self,
        command,
        account,
        transactions,
        mock_transaction_repo,
        mock_suggest_query,
    ):
        payment_id = uuid4()
        mock_suggest_query.suggest_for.return_value = [_suggestion(payment_id, 0.9)]

        matched = await command.execute(account.id)

        assert matched == 1
        mock_transaction_repo.mark_matched.assert_awaited_once_with(
            transactions[0].id,
            payment_id,
        )

    @pytest.mark.asyncio
    async def test_confidence_override(
        self,
        command,
        account,
        mock_transaction_repo,
        mock_suggest_query,
    ):
        mock_suggest_query.suggest_for.side_effect = lambda _: [
            _suggestion(uuid4(), 0.6),
        ]

        assert await command.execute(account.id) == 0
        assert await command.execute(account.id, min_confidence=0.5) == 3

    @pytest.mark.asyncio
    async def test_lost_race_is_not_counted(
        self,
        command,
        account,
        mock_transaction_repo,
        mock_import_repo,
        mock_suggest_query,
    ):
        mock_suggest_query.suggest_for.side_effect = lambda _: [
            _suggestion(uuid4(), 0.9),
        ]
        mock_transaction_repo.mark_matched.return_value = False

        assert await command.execute(account.id) == 0
        mock_import_repo.add_matched_to_latest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_match_unmatched_leaves_imports_alone(
        self,
        command,
        account,
        mock_import_repo,
        mock_suggest_query,
    ):
        mock_suggest_query.suggest_for.side_effect = lambda _: [
            _suggestion(uuid4(), 0.9),
        ]

        assert await command.match_unmatched(account.id) == 3
        mock_import_repo.add_matched_to_latest.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_account(self, command, mock_account_repo):
        mock_account_repo.find_by_id.return_value = None

        with pytest.raises(BankAccountNotFoundError):
            await command.execute(uuid4())

    def test_from_factory(self):
        mock_factory = MagicMock()

        command = AutoMatchTransactionsCommand.from_factory(mock_factory)

        assert isinstance(command, AutoMatchTransactionsCommand)
        mock_factory.statement_import_repository.assert_called_once()
        mock_factory.payment_repository.assert_called_once()
