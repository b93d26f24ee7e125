"""Shared utilities for SQLAlchemy repositories."""

from decimal import Decimal
from typing import Optional

# Numeric(28, 8) scale; also absorbs float noise from SQLite sums
_STORAGE_QUANTUM = Decimal("1E-8")
_CENT = Decimal("0.01")


def to_money(value: object) -> Decimal:
    """
    Convert a stored monetary value back to a Decimal.

    Storage pads to eight places (``100.50000000``) and SQLite hands back
    floats for aggregates. The result keeps at least two decimal places
    and drops the padding beyond that.
    """
    if value is None:
        return Decimal("0.00")
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    amount = amount.quantize(_STORAGE_QUANTUM)
    normalized = amount.normalize()
    if normalized.as_tuple().exponent > -2:
        return amount.quantize(_CENT)
    return normalized


def to_optional_money(value: object) -> Optional[Decimal]:
    if value is None:
        return None
    return to_money(value)
