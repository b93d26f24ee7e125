"""DTO for statement previews."""

from dataclasses import dataclass, field
from typing import Optional

from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat


@dataclass(frozen=True)
class RowIssue:
    """A validation failure pinned to one record and field."""

    row_number: int
    field: str
    column: Optional[int]
    message: str


@dataclass
class StatementPreview:
    """First records of an export plus what the importer would make of them."""

    detected_format: StatementFormat
    mapping: CSVColumnMapping
    rows: list[list[str]]
    issues: list[RowIssue] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        if self.mapping.has_header and len(self.rows) > self.mapping.skip_rows:
            return self.rows[self.mapping.skip_rows]
        return []

    @property
    def is_valid(self) -> bool:
        return not self.issues
