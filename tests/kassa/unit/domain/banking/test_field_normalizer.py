"""Tests for locale-aware amount and date parsing."""

from datetime import date
from decimal import Decimal

import pytest

from kassa.domain.banking.exceptions import InvalidAmountError, InvalidDateError
from kassa.domain.banking.services import (
    candidate_date_formats,
    format_amount,
    parse_amount,
    parse_date,
    parse_date_formats,
)


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("100.50", Decimal("100.50")),
            ("-42", Decimal("-42")),
            ("+5.5", Decimal("5.5")),
            ("1,234.56", Decimal("1234.56")),
            ("(100.50)", Decimal("-100.50")),
            ("€ 99.99", Decimal("99.99")),
            ("  12.00  ", Decimal("12.00")),
        ],
    )
    def test_dot_decimal_amounts(self, raw, expected):
        assert parse_amount(raw) == expected

    def test_comma_decimal_with_space_thousands(self):
        """Estonian bank exports: '1 234,56 €'."""
        amount = parse_amount(
            "1 234,56 €",
            decimal_separator=",",
            thousands_separator=" ",
        )

        assert amount == Decimal("1234.56")

    def test_non_breaking_space_is_ignored(self):
        amount = parse_amount(
            "1\u00a0234,56",
            decimal_separator=",",
            thousands_separator=" ",
        )

        assert amount == Decimal("1234.56")

    def test_result_is_decimal_not_float(self):
        assert isinstance(parse_amount("0.1"), Decimal)
        assert parse_amount("0.1") + parse_amount("0.2") == Decimal("0.3")

    @pytest.mark.parametrize("raw", ["", "abc", "12a", "1.2.3", "--5", "()"])
    def test_garbage_raises(self, raw):
        with pytest.raises(InvalidAmountError):
            parse_amount(raw)

    def test_error_carries_column_and_raw_text(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            parse_amount(" twelve ", column=3)

        assert exc_info.value.column == 3
        assert exc_info.value.raw == "twelve"
        assert exc_info.value.field == "amount"
        assert exc_info.value.message == "invalid amount 'twelve'"


class TestParseDate:
    """Tests for strict single-format date parsing."""

    def test_parses_declared_format(self):
        assert parse_date("14.03.2025", "%d.%m.%Y") == date(2025, 3, 14)

    def test_strips_whitespace(self):
        assert parse_date(" 2025-03-14 ", "%Y-%m-%d") == date(2025, 3, 14)

    def test_other_layout_is_rejected(self):
        """The declared format is never second-guessed."""
        with pytest.raises(InvalidDateError) as exc_info:
            parse_date("2025-03-14", "%d.%m.%Y", column=0)

        assert exc_info.value.expected_format == "%d.%m.%Y"
        assert exc_info.value.column == 0
        assert "expected format %d.%m.%Y" in exc_info.value.message


class TestParseDateFormats:
    """Tests for best-effort parsing of free-form dates."""

    def test_iso_date(self):
        assert parse_date_formats("2025-03-14") == date(2025, 3, 14)

    def test_dotted_day_first(self):
        assert parse_date_formats("14.03.2025") == date(2025, 3, 14)

    def test_ambiguous_slash_date_reads_month_first(self):
        assert parse_date_formats("01/02/2025") == date(2025, 1, 2)

    def test_day_first_removes_month_first_reading(self):
        assert parse_date_formats("01/02/2025", day_first=True) == date(2025, 2, 1)

    def test_falls_back_to_day_first_when_month_is_impossible(self):
        assert parse_date_formats("14/03/2025") == date(2025, 3, 14)

    def test_month_first_declared_rejects_day_first_date(self):
        with pytest.raises(InvalidDateError):
            parse_date_formats("14/03/2025", day_first=False)

    def test_iso_datetime_is_accepted(self):
        assert parse_date_formats("2025-03-14T10:30:00") == date(2025, 3, 14)

    def test_unknown_layout_raises(self):
        with pytest.raises(InvalidDateError):
            parse_date_formats("March 14th")

    def test_candidate_formats_start_with_iso(self):
        assert candidate_date_formats()[0] == "%Y-%m-%d"
        assert "%m/%d/%Y" not in candidate_date_formats(day_first=True)


class TestFormatAmount:
    """Tests for canonical amount rendering."""

    def test_groups_thousands(self):
        assert format_amount(Decimal("-1234.5")) == "-1,234.50"

    def test_negative_zero_renders_as_zero(self):
        assert format_amount(Decimal("-0.001")) == "0.00"

    def test_rounds_half_up(self):
        assert format_amount(Decimal("2.345")) == "2.35"

    @pytest.mark.parametrize(
        ("raw", "decimal_separator", "thousands_separator"),
        [
            ("1 234,56", ",", " "),
            ("1.234,56", ",", "."),
            ("(100.50)", ".", ","),
            ("-1,234.56", ".", ","),
            ("1 234 567,8", ",", " "),
            ("0,00", ",", " "),
        ],
    )
    def test_canonical_text_parses_back_to_the_same_amount(
        self,
        raw,
        decimal_separator,
        thousands_separator,
    ):
        value = parse_amount(raw, decimal_separator, thousands_separator)

        assert parse_amount(format_amount(value), ".", ",") == value
