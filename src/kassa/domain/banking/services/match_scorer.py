"""Scoring of payment candidates against an unmatched bank transaction."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from difflib import SequenceMatcher
from typing import Iterable

from kassa.domain.banking.entities import BankTransaction, Payment
from kassa.domain.banking.value_objects import MatchSuggestion, PaymentType
from kassa.domain.shared.time import days_between

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")
_COMPANY_SUFFIXES = (" oü", " as", " ou", " llc", " ltd", " inc", " gmbh", " ag")

MAX_SUGGESTIONS = 5


@dataclass(frozen=True)
class MatcherConfig:
    """Weights and thresholds of the suggestion engine."""

    exact_amount_bonus: float = 0.5
    date_proximity_weight: float = 0.2
    reference_match_weight: float = 0.2
    name_match_weight: float = 0.1
    payment_number_bonus: float = 0.1
    min_confidence: float = 0.3
    max_date_diff_days: int = 7
    amount_tolerance: Decimal = Decimal("0.05")


DEFAULT_MATCHER_CONFIG = MatcherConfig()


def normalize_reference(value: str) -> str:
    return _NON_ALNUM.sub("", value.strip().lower())


def normalize_name(value: str) -> str:
    name = value.strip().lower()
    for suffix in _COMPANY_SUFFIXES:
        name = name.removesuffix(suffix)
    return _WHITESPACE.sub(" ", name).strip()


def text_similarity(first: str, second: str) -> float:
    """Fuzzy similarity in [0, 1]; containment of one text in the other is 1."""
    if not first or not second:
        return 0.0
    if first == second:
        return 1.0
    shorter, longer = sorted((first, second), key=len)
    if len(shorter) >= 3 and shorter in longer:
        return 1.0
    return SequenceMatcher(None, first, second).ratio()


def is_candidate(
    transaction: BankTransaction,
    payment: Payment,
    config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
) -> bool:
    """Direction agrees with the sign and the amount is within tolerance."""
    if payment.payment_type != PaymentType.for_amount(transaction.amount):
        return False
    target = abs(transaction.amount)
    if target == 0:
        return abs(payment.amount) == 0
    return abs(abs(payment.amount) - target) <= target * config.amount_tolerance


@dataclass(frozen=True)
class _Scored:
    suggestion: MatchSuggestion
    days_apart: int
    text_overlap: float


def _score(
    transaction: BankTransaction,
    payment: Payment,
    config: MatcherConfig,
) -> _Scored:
    confidence = 0.0
    reasons: list[str] = []

    transaction_amount = abs(transaction.amount)
    payment_amount = abs(payment.amount)
    if transaction_amount == payment_amount:
        confidence += config.exact_amount_bonus
        reasons.append("exact amount")
    elif payment_amount:
        relative_diff = abs(transaction_amount - payment_amount) / payment_amount
        if relative_diff < Decimal("0.01"):
            confidence += config.exact_amount_bonus * 0.8
            reasons.append("amount within 1%")
        elif relative_diff < Decimal("0.05"):
            confidence += config.exact_amount_bonus * 0.5
            reasons.append("amount within 5%")

    days_apart = days_between(transaction.transaction_date, payment.payment_date)
    if days_apart <= config.max_date_diff_days:
        if config.max_date_diff_days:
            decay = 1 - days_apart / config.max_date_diff_days
        else:
            decay = 1.0
        confidence += config.date_proximity_weight * decay
        if days_apart == 0:
            reasons.append("same date")
        elif days_apart <= 2:
            reasons.append("date within 2 days")

    reference_similarity = text_similarity(
        normalize_reference(transaction.reference),
        normalize_reference(payment.reference or ""),
    )
    if reference_similarity > 0.8:
        confidence += config.reference_match_weight
        reasons.append("reference match")
    elif reference_similarity > 0.5:
        confidence += config.reference_match_weight * 0.5
        reasons.append("partial reference match")

    name_similarity = text_similarity(
        normalize_name(transaction.counterparty_name),
        normalize_name(payment.contact_name or ""),
    )
    if name_similarity > 0.7:
        confidence += config.name_match_weight
        reasons.append("name match")
    elif name_similarity > 0.4:
        confidence += config.name_match_weight * 0.5
        reasons.append("partial name match")

    number = payment.payment_number.strip().lower()
    if number and number in transaction.description.lower():
        confidence += config.payment_number_bonus
        reasons.append("payment number in description")

    suggestion = MatchSuggestion(
        payment_id=payment.id,
        payment_number=payment.payment_number,
        payment_date=payment.payment_date,
        amount=payment.amount,
        contact_name=payment.contact_name,
        reference=payment.reference,
        confidence=round(min(confidence, 1.0), 4),
        match_reason=", ".join(reasons),
    )
    return _Scored(
        suggestion=suggestion,
        days_apart=days_apart,
        text_overlap=max(reference_similarity, name_similarity),
    )


def rank_payments(
    transaction: BankTransaction,
    payments: Iterable[Payment],
    config: MatcherConfig = DEFAULT_MATCHER_CONFIG,
    limit: int = MAX_SUGGESTIONS,
) -> list[MatchSuggestion]:
    """Most confident suggestions first; empty when nothing clears the floor.

    Equal confidence is broken by the closer date, then by the stronger
    counterparty/reference text overlap.
    """
    scored = [
        _score(transaction, payment, config)
        for payment in payments
        if is_candidate(transaction, payment, config)
    ]
    scored = [s for s in scored if s.suggestion.confidence >= config.min_confidence]
    scored.sort(key=lambda s: (-s.suggestion.confidence, s.days_apart, -s.text_overlap))
    return [s.suggestion for s in scored[:limit]]


def pick_unambiguous(
    suggestions: list[MatchSuggestion],
    min_confidence: float,
) -> MatchSuggestion | None:
    """Best suggestion if it is confident and clearly ahead of the runner-up."""
    if not suggestions:
        return None
    best = suggestions[0]
    if best.confidence < min_confidence:
        return None
    if len(suggestions) > 1 and suggestions[1].confidence > best.confidence * 0.9:
        return None
    return best
