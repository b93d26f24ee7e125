"""Preview and validate a bank export before importing it."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from kassa.application.dtos.banking import RowIssue, StatementPreview
from kassa.domain.banking.exceptions import StatementParseError
from kassa.domain.banking.services import (
    StatementRecord,
    detect_format,
    iter_statement_records,
    preview_records,
    read_lines,
    resolve_mapping,
    validate_row,
)
from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_ROWS = 10


class PreviewStatementQuery:
    """Show what the importer would make of a file, without storing anything.

    The preview covers the first ``max_rows`` records. Validation covers
    every data record of the file unless ``validate_all`` is False, in
    which case only the previewed ones are checked.
    """

    def __init__(self, max_rows: int = DEFAULT_PREVIEW_ROWS):
        self._max_rows = max_rows

    def execute(
        self,
        stream: Iterable[str],
        statement_format: Optional[StatementFormat | str] = None,
        mapping: Optional[CSVColumnMapping] = None,
        validate_all: bool = True,
    ) -> StatementPreview:
        lines = read_lines(stream)
        previewed = preview_records(lines, self._max_rows)
        rows = [record.fields for record in previewed]

        header = rows[0] if rows else []
        detected = detect_format(header)
        if mapping is None:
            mapping = resolve_mapping(header, statement_format)

        if validate_all:
            records = iter_statement_records(lines, mapping)
        else:
            records = [r for r in previewed if r.row_number > mapping.header_rows]
        issues = [
            issue for issue in (_check(record, mapping) for record in records) if issue
        ]
        logger.debug(
            "Previewed %d row(s) as %s: %d issue(s)",
            len(rows),
            detected.value,
            len(issues),
        )
        return StatementPreview(
            detected_format=detected,
            mapping=mapping,
            rows=rows,
            issues=issues,
        )


def _check(record: StatementRecord, mapping: CSVColumnMapping) -> Optional[RowIssue]:
    try:
        record.check_readable()
        validate_row(record.fields, mapping)
    except StatementParseError as e:
        return RowIssue(
            row_number=record.row_number,
            field=e.field,
            column=e.column,
            message=e.message,
        )
    return None

