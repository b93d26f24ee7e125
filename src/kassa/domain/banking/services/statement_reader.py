"""Reading bank exports: bounded preview, row validation, row parsing."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from itertools import islice
from typing import Iterable, Iterator, Optional, Sequence, Union

from kassa.domain.banking.exceptions import (
    AmountColumnMissingError,
    DateColumnMissingError,
    InvalidDateError,
    MalformedRecordError,
    StatementStreamError,
)
from kassa.domain.banking.services.field_normalizer import parse_amount, parse_date
from kassa.domain.banking.value_objects import CSVColumnMapping, StatementLine


@dataclass(frozen=True)
class StatementRecord:
    """A raw record and its 1-based position among the file's records.

    A record the CSV reader could not split has no fields and carries
    the ``MalformedRecordError`` instead.
    """

    row_number: int
    fields: list[str]
    error: Optional[MalformedRecordError] = None

    def check_readable(self) -> None:
        """Raise the record's ``MalformedRecordError``, if it has one."""
        if self.error is not None:
            raise self.error


def _records(
    stream: Iterable[str],
) -> Iterator[Union[list[str], MalformedRecordError]]:
    """Comma-separated records; ragged rows are kept, blank lines dropped.

    A ``csv.Error`` spoils only the record being read. Decoding and I/O
    failures end the stream with ``StatementStreamError``.
    """
    reader = csv.reader(stream, skipinitialspace=True)
    while True:
        try:
            record = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield MalformedRecordError(str(e))
            continue
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Statement file could not be read near record {reader.line_num}"
            raise StatementStreamError(msg) from e
        if record:
            yield record


def _numbered(stream: Iterable[str]) -> Iterator[StatementRecord]:
    for index, record in enumerate(_records(stream), start=1):
        if isinstance(record, MalformedRecordError):
            yield StatementRecord(row_number=index, fields=[], error=record)
        else:
            yield StatementRecord(row_number=index, fields=record)


def read_lines(stream: Iterable[str]) -> list[str]:
    """Buffer a text stream so it can be read more than once."""
    try:
        return list(stream)
    except (OSError, UnicodeDecodeError) as e:
        msg = "Statement file could not be read"
        raise StatementStreamError(msg) from e


def preview_records(stream: Iterable[str], max_rows: int) -> list[StatementRecord]:
    """Read at most ``max_rows`` numbered records, header included."""
    if max_rows <= 0:
        return []
    return list(islice(_numbered(stream), max_rows))


def preview_rows(stream: Iterable[str], max_rows: int) -> list[list[str]]:
    """Read at most ``max_rows`` raw records, header included.

    End of stream simply ends the preview. A malformed record shows as an
    empty row so positions stay aligned with row numbers. Read failures
    raise ``StatementStreamError``.
    """
    return [record.fields for record in preview_records(stream, max_rows)]


def iter_statement_records(
    stream: Iterable[str],
    mapping: CSVColumnMapping,
) -> Iterator[StatementRecord]:
    """Yield the data records of an export, skipping leading and header rows."""
    for record in _numbered(stream):
        if record.row_number <= mapping.header_rows:
            continue
        yield record


def _parse_required(
    record: Sequence[str],
    mapping: CSVColumnMapping,
) -> tuple[date, Decimal]:
    if mapping.date_column >= len(record):
        raise DateColumnMissingError(mapping.date_column)
    if mapping.amount_column >= len(record):
        raise AmountColumnMissingError(mapping.amount_column)

    transaction_date = parse_date(
        record[mapping.date_column],
        mapping.date_format,
        mapping.date_column,
    )
    amount = parse_amount(
        record[mapping.amount_column],
        mapping.decimal_separator,
        mapping.thousands_separator,
        column=mapping.amount_column,
    )
    return transaction_date, amount


def validate_row(record: Sequence[str], mapping: CSVColumnMapping) -> None:
    """Check that date and amount are present and parse under ``mapping``.

    Raises
    ------
    DateColumnMissingError, AmountColumnMissingError
        If the row is too short for the mapped column.
    InvalidDateError, InvalidAmountError
        If the mapped cell does not parse.
    """
    _parse_required(record, mapping)


def _cell(record: Sequence[str], column: Optional[int]) -> str:
    if column is None or column >= len(record):
        return ""
    return record[column].strip()


def parse_statement_record(
    record: Sequence[str],
    mapping: CSVColumnMapping,
) -> StatementLine:
    """Turn one raw record into a ``StatementLine``.

    Date and amount are mandatory. The value date is optional and dropped
    when it does not parse; other optional columns default to ``""``.
    """
    transaction_date, amount = _parse_required(record, mapping)

    value_date = None
    raw_value_date = _cell(record, mapping.value_date_column)
    if raw_value_date:
        try:
            value_date = parse_date(raw_value_date, mapping.date_format)
        except InvalidDateError:
            value_date = None

    return StatementLine(
        transaction_date=transaction_date,
        value_date=value_date,
        amount=amount,
        description=_cell(record, mapping.description_column),
        reference=_cell(record, mapping.reference_column),
        counterparty_name=_cell(record, mapping.counterparty_name_column),
        counterparty_account=_cell(record, mapping.counterparty_account_column),
        external_id=_cell(record, mapping.external_id_column),
    )
