"""Locale-aware parsing of statement amounts and dates.

Amounts are always parsed into ``Decimal``; binary floats never touch money.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from kassa.domain.banking.exceptions import InvalidAmountError, InvalidDateError

# Currency glyphs and every kind of whitespace (including NBSP).
_NOISE_PATTERN = re.compile(r"[€$£\s]")
_CANONICAL_AMOUNT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

ISO_DATE = "%Y-%m-%d"
DOT_DAY_FIRST = "%d.%m.%Y"
SLASH_MONTH_FIRST = "%m/%d/%Y"
SLASH_DAY_FIRST = "%d/%m/%Y"
SLASH_ISO = "%Y/%m/%d"
DASH_DAY_FIRST = "%d-%m-%Y"
DASH_MONTH_FIRST = "%m-%d-%Y"


def parse_amount(
    raw: str,
    decimal_separator: str = ".",
    thousands_separator: str = ",",
    column: Optional[int] = None,
) -> Decimal:
    """Parse a monetary string such as ``"1 234,56 €"`` or ``"(100.50)"``.

    Parameters
    ----------
    raw
        Text as found in the export.
    decimal_separator
        Character the export uses as decimal point.
    thousands_separator
        Character the export uses to group thousands, may be empty.
    column
        Column index, only used to enrich the error.

    Returns
    -------
    Signed decimal amount. Parenthesized values are negative.

    Raises
    ------
    InvalidAmountError
        If anything but a number remains after cleaning.
    """
    text = _NOISE_PATTERN.sub("", raw.strip())

    if thousands_separator:
        text = text.replace(thousands_separator, "")
    if decimal_separator != ".":
        text = text.replace(decimal_separator, ".")

    if text.startswith("(") and text.endswith(")"):
        text = "-" + text[1:-1]

    if not _CANONICAL_AMOUNT.fullmatch(text):
        raise InvalidAmountError(raw.strip(), column=column)

    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise InvalidAmountError(raw.strip(), column=column) from e


def parse_date(raw: str, date_format: str, column: Optional[int] = None) -> date:
    """Parse a date with exactly one declared ``strptime`` format."""
    text = raw.strip()
    try:
        return datetime.strptime(text, date_format).date()  # noqa: DTZ007
    except ValueError as e:
        raise InvalidDateError(
            text,
            column=column,
            expected_format=date_format,
        ) from e


def candidate_date_formats(day_first: Optional[bool] = None) -> list[str]:
    """Formats tried by :func:`parse_date_formats`, in order.

    Without a declared order, slash and dash dates are tried month-first
    and then day-first, so ``01/02/2025`` silently reads as January 2nd.
    Declaring ``day_first`` removes the other reading altogether.
    """
    if day_first is None:
        slash = [SLASH_MONTH_FIRST, SLASH_DAY_FIRST]
        dash = [DASH_DAY_FIRST, DASH_MONTH_FIRST]
    elif day_first:
        slash = [SLASH_DAY_FIRST]
        dash = [DASH_DAY_FIRST]
    else:
        slash = [SLASH_MONTH_FIRST]
        dash = [DASH_MONTH_FIRST]
    return [ISO_DATE, DOT_DAY_FIRST, *slash, SLASH_ISO, *dash]


def parse_date_formats(raw: str, day_first: Optional[bool] = None) -> date:
    """Parse a date in any common layout; the first format that fits wins.

    This is a best-effort heuristic for free-form input, not a guarantee.
    Statement imports use the mapping's declared format instead.

    Raises
    ------
    InvalidDateError
        If no known format fits.
    """
    text = raw.strip()
    for date_format in candidate_date_formats(day_first):
        try:
            return datetime.strptime(text, date_format).date()  # noqa: DTZ007
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidDateError(text) from e


def format_amount(value: Decimal, decimals: int = 2) -> str:
    """Render an amount as ``-1,234.56`` whatever locale it came from."""
    exponent = Decimal(1).scaleb(-decimals)
    quantized = value.quantize(exponent, rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        quantized = quantized.copy_abs()
    return f"{quantized:,f}"
