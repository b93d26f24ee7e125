"""Tests for payment suggestion scoring."""

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from kassa.domain.banking.services import (
    MatcherConfig,
    is_candidate,
    pick_unambiguous,
    rank_payments,
    text_similarity,
)
from kassa.domain.banking.value_objects import MatchSuggestion, PaymentType
from tests.shared.fixtures.factories import (
    TestTenantFactory,
    make_payment,
    make_transaction,
)

TENANT_ID = TestTenantFactory.DEFAULT_TENANT_ID
ACCOUNT_ID = uuid4()
BOOKED = date(2025, 3, 14)


@pytest.fixture
def incoming():
    """A 100.00 inflow quoting an invoice reference."""
    return make_transaction(
        TENANT_ID,
        ACCOUNT_ID,
        amount=Decimal("100.00"),
        transaction_date=BOOKED,
        description="Payment for PMT-000007",
        reference="RF18 5390 0754",
        counterparty_name="Acme OÜ",
    )


def _suggestion(confidence: float) -> MatchSuggestion:
    return MatchSuggestion(
        payment_id=uuid4(),
        payment_number="PMT-000001",
        payment_date=BOOKED,
        amount=Decimal("100.00"),
        confidence=confidence,
    )


class TestTextSimilarity:
    """Tests for text_similarity."""

    def test_empty_text_scores_zero(self):
        assert text_similarity("", "acme") == 0.0
        assert text_similarity("acme", "") == 0.0

    def test_identical_text_scores_one(self):
        assert text_similarity("acme", "acme") == 1.0

    def test_containment_scores_one(self):
        assert text_similarity("inv1001", "paymentinv1001march") == 1.0

    def test_unrelated_text_scores_low(self):
        assert text_similarity("acme", "zulu") < 0.5


class TestIsCandidate:
    """Tests for the candidate filter."""

    def test_direction_must_match_sign(self, incoming):
        made = make_payment(TENANT_ID, payment_type=PaymentType.MADE)

        assert not is_candidate(incoming, made)

    def test_within_tolerance(self, incoming):
        payment = make_payment(TENANT_ID, amount=Decimal("104.99"))

        assert is_candidate(incoming, payment)

    def test_outside_tolerance(self, incoming):
        payment = make_payment(TENANT_ID, amount=Decimal("106.00"))

        assert not is_candidate(incoming, payment)

    def test_outflow_matches_made_payment(self):
        outgoing = make_transaction(TENANT_ID, ACCOUNT_ID, amount=Decimal("-50.00"))
        payment = make_payment(
            TENANT_ID,
            amount=Decimal("50.00"),
            payment_type=PaymentType.MADE,
        )

        assert is_candidate(outgoing, payment)

    def test_custom_tolerance(self, incoming):
        payment = make_payment(TENANT_ID, amount=Decimal("104.00"))
        strict = MatcherConfig(amount_tolerance=Decimal("0.01"))

        assert not is_candidate(incoming, payment, strict)


class TestRankPayments:
    """Tests for rank_payments."""

    def test_perfect_match_is_capped_at_one(self, incoming):
        payment = make_payment(
            TENANT_ID,
            amount=Decimal("100.00"),
            payment_date=BOOKED,
            payment_number="PMT-000007",
            reference="RF1853900754",
            contact_name="ACME",
        )

        [suggestion] = rank_payments(incoming, [payment])

        assert suggestion.payment_id == payment.id
        assert suggestion.confidence == 1.0
        assert "exact amount" in suggestion.match_reason
        assert "same date" in suggestion.match_reason
        assert "reference match" in suggestion.match_reason
        assert "payment number in description" in suggestion.match_reason

    def test_best_first(self, incoming):
        close = make_payment(TENANT_ID, payment_date=BOOKED, payment_number="P-1")
        later = make_payment(
            TENANT_ID,
            payment_date=BOOKED + timedelta(days=5),
            payment_number="P-2",
        )

        suggestions = rank_payments(incoming, [later, close])

        assert [s.payment_id for s in suggestions] == [close.id, later.id]
        assert suggestions[0].confidence > suggestions[1].confidence

    def test_weak_candidates_are_dropped(self, incoming):
        """2% off and six days apart stays under the 0.3 floor."""
        weak = make_payment(
            TENANT_ID,
            amount=Decimal("102.00"),
            payment_date=BOOKED + timedelta(days=6),
            payment_number="P-9",
        )

        assert rank_payments(incoming, [weak]) == []

    def test_equal_confidence_prefers_closer_date(self, incoming):
        """Beyond the date window both score the same; closer still wins."""
        far = make_payment(
            TENANT_ID,
            payment_date=BOOKED - timedelta(days=20),
            payment_number="P-1",
        )
        nearer = make_payment(
            TENANT_ID,
            payment_date=BOOKED - timedelta(days=10),
            payment_number="P-2",
        )

        suggestions = rank_payments(incoming, [far, nearer])

        assert suggestions[0].confidence == suggestions[1].confidence
        assert suggestions[0].payment_id == nearer.id

    def test_limit(self, incoming):
        payments = [
            make_payment(TENANT_ID, payment_number=f"P-{n}") for n in range(8)
        ]

        assert len(rank_payments(incoming, payments, limit=3)) == 3

    def test_non_candidates_are_never_scored(self, incoming):
        made = make_payment(TENANT_ID, payment_type=PaymentType.MADE)

        assert rank_payments(incoming, [made]) == []

    def test_confidence_stays_in_unit_interval(self, incoming):
        generous = MatcherConfig(exact_amount_bonus=1.0, date_proximity_weight=1.0)
        payment = make_payment(TENANT_ID, payment_date=BOOKED)

        [suggestion] = rank_payments(incoming, [payment], generous)

        assert 0.0 <= suggestion.confidence <= 1.0


class TestPickUnambiguous:
    """Tests for the auto-match decision rule."""

    def test_no_suggestions(self):
        assert pick_unambiguous([], 0.7) is None

    def test_below_floor(self):
        assert pick_unambiguous([_suggestion(0.6)], 0.7) is None

    def test_single_confident_suggestion(self):
        best = _suggestion(0.8)

        assert pick_unambiguous([best], 0.7) is best

    def test_close_runner_up_blocks(self):
        assert pick_unambiguous([_suggestion(0.8), _suggestion(0.75)], 0.7) is None

    def test_clear_lead_wins(self):
        best = _suggestion(0.9)

        assert pick_unambiguous([best, _suggestion(0.5)], 0.7) is best
