"""Unit tests for the reconciliation tie-out."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from kassa.application.queries.banking import ReconciliationSummaryQuery
from kassa.domain.banking.entities import BankReconciliation
from kassa.domain.banking.exceptions import ReconciliationNotFoundError
from kassa.domain.banking.value_objects import TransactionStatus


@pytest.fixture
def reconciliation(tenant):
    return BankReconciliation(
        tenant_id=tenant.tenant_id,
        bank_account_id=uuid4(),
        statement_date=date(2025, 3, 31),
        opening_balance=Decimal("1000.00"),
        closing_balance=Decimal("1250.00"),
    )


@pytest.fixture
def mock_reconciliation_repo(reconciliation):
    repo = AsyncMock()
    repo.find_by_id.return_value = reconciliation
    return repo


@pytest.fixture
def mock_transaction_repo():
    repo = AsyncMock()
    repo.sum_for_reconciliation.side_effect = [
        (Decimal("200.00"), 3),
        (Decimal("40.00"), 1),
    ]
    return repo


class TestReconciliationSummaryQuery:
    """Tests for ReconciliationSummaryQuery."""

    @pytest.mark.asyncio
    async def test_summary(
        self,
        mock_reconciliation_repo,
        mock_transaction_repo,
        reconciliation,
    ):
        query = ReconciliationSummaryQuery(
            mock_reconciliation_repo,
            mock_transaction_repo,
        )

        summary = await query.execute(reconciliation.id)

        assert summary.matched_total == Decimal("200.00")
        assert summary.matched_count == 3
        assert summary.unmatched_count == 1
        assert summary.computed_closing_balance == Decimal("1200.00")
        assert summary.difference == Decimal("50.00")
        assert not summary.is_balanced
        first, second = mock_transaction_repo.sum_for_reconciliation.await_args_list
        assert first.args[1] == (
            TransactionStatus.MATCHED,
            TransactionStatus.RECONCILED,
        )
        assert second.args[1] == (TransactionStatus.UNMATCHED,)

    @pytest.mark.asyncio
    async def test_balanced(
        self,
        mock_reconciliation_repo,
        mock_transaction_repo,
        reconciliation,
    ):
        mock_transaction_repo.sum_for_reconciliation.side_effect = [
            (Decimal("250.00"), 2),
            (Decimal("0"), 0),
        ]
        query = ReconciliationSummaryQuery(
            mock_reconciliation_repo,
            mock_transaction_repo,
        )

        summary = await query.execute(reconciliation.id)

        assert summary.is_balanced

    @pytest.mark.asyncio
    async def test_unknown_session(
        self,
        mock_reconciliation_repo,
        mock_transaction_repo,
    ):
        mock_reconciliation_repo.find_by_id.return_value = None
        query = ReconciliationSummaryQuery(
            mock_reconciliation_repo,
            mock_transaction_repo,
        )

        with pytest.raises(ReconciliationNotFoundError):
            await query.execute(uuid4())
