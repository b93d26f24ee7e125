"""Tests for reading, validating and parsing statement records."""

import io
from datetime import date
from decimal import Decimal

import pytest

from kassa.domain.banking.exceptions import (
    AmountColumnMissingError,
    DateColumnMissingError,
    InvalidAmountError,
    InvalidDateError,
    MalformedRecordError,
    StatementStreamError,
)
from kassa.domain.banking.services import (
    GENERIC_MAPPING,
    SWEDBANK_EE_MAPPING,
    iter_statement_records,
    parse_statement_record,
    preview_records,
    preview_rows,
    read_lines,
    validate_row,
)
from kassa.domain.banking.value_objects import CSVColumnMapping

GENERIC_CSV = (
    "date,amount,description\n"
    "2025-03-01,100.00,Invoice 1\n"
    "\n"
    "2025-03-02,-20.50,Coffee\n"
    "2025-03-03,5\n"
)

OVERSIZED_CSV = (
    "date,amount,description\n"
    "2025-03-01,100.00,Invoice 1\n"
    f"2025-03-02,1.00,\"{'x' * 200_000}\"\n"
    "2025-03-03,5.00,Fee\n"
)

SWEDBANK_ROW = [
    "14.03.2025",
    "15.03.2025",
    "EUR",
    "1 234,56",
    "K",
    "RF18539007547034",
    "Invoice 1001",
    "Acme OÜ",
    "EE382200221020145685",
]


def _failing_stream():
    yield "date,amount\n"
    yield "2025-03-01,1\n"
    raise OSError("connection reset")


class TestPreviewRows:
    """Tests for preview_rows."""

    def test_reads_header_and_rows(self):
        rows = preview_rows(io.StringIO(GENERIC_CSV), 10)

        assert rows[0] == ["date", "amount", "description"]
        assert len(rows) == 4

    def test_stops_at_max_rows(self):
        rows = preview_rows(io.StringIO(GENERIC_CSV), 2)

        assert rows == [
            ["date", "amount", "description"],
            ["2025-03-01", "100.00", "Invoice 1"],
        ]

    def test_blank_lines_are_dropped_and_ragged_rows_kept(self):
        rows = preview_rows(io.StringIO(GENERIC_CSV), 10)

        assert ["2025-03-03", "5"] in rows
        assert [] not in rows

    def test_quoted_fields_keep_commas(self):
        rows = preview_rows(io.StringIO('a,"1 234,56",c\n'), 1)

        assert rows == [["a", "1 234,56", "c"]]

    def test_zero_rows(self):
        assert preview_rows(io.StringIO(GENERIC_CSV), 0) == []

    def test_empty_stream(self):
        assert preview_rows(io.StringIO(""), 5) == []

    def test_read_failure_raises_stream_error(self):
        with pytest.raises(StatementStreamError):
            preview_rows(_failing_stream(), 10)

    def test_undecodable_bytes_raise_stream_error(self):
        stream = io.TextIOWrapper(
            io.BytesIO(b"date,amount\n2025-03-01,\xff\xfe\n"),
            encoding="utf-8",
        )

        with pytest.raises(StatementStreamError):
            preview_rows(stream, 10)

    def test_read_lines_wraps_failures(self):
        with pytest.raises(StatementStreamError):
            read_lines(_failing_stream())


class TestIterStatementRecords:
    """Tests for iter_statement_records."""

    def test_skips_header_and_numbers_records_from_one(self):
        records = list(
            iter_statement_records(io.StringIO(GENERIC_CSV), GENERIC_MAPPING),
        )

        assert [r.row_number for r in records] == [2, 3, 4]
        assert records[0].fields == ["2025-03-01", "100.00", "Invoice 1"]

    def test_skip_rows_before_header(self):
        csv_text = "Account statement\nExported 2025-03-31\n" + GENERIC_CSV
        mapping = CSVColumnMapping(skip_rows=2)

        records = list(iter_statement_records(io.StringIO(csv_text), mapping))

        assert records[0].row_number == 4
        assert records[0].fields[0] == "2025-03-01"

    def test_without_header_every_record_is_data(self):
        mapping = CSVColumnMapping(has_header=False)

        records = list(iter_statement_records(io.StringIO("2025-03-01,1\n"), mapping))

        assert [r.row_number for r in records] == [1]


class TestMalformedRecords:
    """A record the CSV reader rejects does not end the file."""

    def test_reading_continues_after_oversized_field(self):
        records = list(
            iter_statement_records(io.StringIO(OVERSIZED_CSV), GENERIC_MAPPING),
        )

        assert [r.row_number for r in records] == [2, 3, 4]
        assert [r.error is None for r in records] == [True, False, True]
        assert records[2].fields == ["2025-03-03", "5.00", "Fee"]

    def test_error_is_row_level(self):
        [_, bad, _] = iter_statement_records(
            io.StringIO(OVERSIZED_CSV),
            GENERIC_MAPPING,
        )

        with pytest.raises(MalformedRecordError) as exc_info:
            bad.check_readable()

        assert bad.fields == []
        assert exc_info.value.field == "record"
        assert exc_info.value.message.startswith("malformed record: field larger")

    def test_preview_keeps_positions(self):
        records = preview_records(io.StringIO(OVERSIZED_CSV), 10)
        rows = preview_rows(io.StringIO(OVERSIZED_CSV), 10)

        assert [r.row_number for r in records] == [1, 2, 3, 4]
        assert rows[2] == []
        assert rows[3] == ["2025-03-03", "5.00", "Fee"]

    def test_readable_record_passes_check(self):
        [first, *_] = iter_statement_records(
            io.StringIO(GENERIC_CSV),
            GENERIC_MAPPING,
        )

        first.check_readable()


class TestValidateRow:
    """Tests for validate_row."""

    def test_valid_row(self):
        validate_row(["2025-03-01", "100.00"], GENERIC_MAPPING)

    def test_short_row_missing_date(self):
        mapping = CSVColumnMapping(date_column=3, amount_column=0)

        with pytest.raises(DateColumnMissingError) as exc_info:
            validate_row(["1.00"], mapping)

        assert exc_info.value.column == 3
        assert exc_info.value.message == "missing date column (index 3)"

    def test_short_row_missing_amount(self):
        with pytest.raises(AmountColumnMissingError) as exc_info:
            validate_row(["2025-03-01"], GENERIC_MAPPING)

        assert exc_info.value.field == "amount"
        assert exc_info.value.column == 1

    def test_bad_date(self):
        with pytest.raises(InvalidDateError):
            validate_row(["03/01/2025", "1.00"], GENERIC_MAPPING)

    def test_bad_amount(self):
        with pytest.raises(InvalidAmountError):
            validate_row(["2025-03-01", "n/a"], GENERIC_MAPPING)


class TestParseStatementRecord:
    """Tests for parse_statement_record."""

    def test_swedbank_row(self):
        line = parse_statement_record(SWEDBANK_ROW, SWEDBANK_EE_MAPPING)

        assert line.transaction_date == date(2025, 3, 14)
        assert line.value_date == date(2025, 3, 15)
        assert line.amount == Decimal("1234.56")
        assert line.reference == "RF18539007547034"
        assert line.description == "Invoice 1001"
        assert line.counterparty_name == "Acme OÜ"
        assert line.counterparty_account == "EE382200221020145685"
        assert line.external_id == ""

    def test_missing_optional_columns_default_to_empty(self):
        line = parse_statement_record(["2025-03-01", "-5.00"], GENERIC_MAPPING)

        assert line.description == ""
        assert line.value_date is None
        assert line.amount == Decimal("-5.00")

    def test_unparseable_value_date_is_dropped(self):
        row = list(SWEDBANK_ROW)
        row[1] = "soon"

        line = parse_statement_record(row, SWEDBANK_EE_MAPPING)

        assert line.value_date is None
        assert line.transaction_date == date(2025, 3, 14)

    def test_text_fields_are_trimmed(self):
        line = parse_statement_record(
            ["2025-03-01", "1", "  Rent March  "],
            GENERIC_MAPPING,
        )

        assert line.description == "Rent March"

    def test_external_id_column(self):
        mapping = CSVColumnMapping(external_id_column=3)

        line = parse_statement_record(["2025-03-01", "1", "x", "TX-9"], mapping)

        assert line.external_id == "TX-9"
