"""DTO for statement import results."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID


@dataclass
class ImportResult:
    """Outcome of one statement import run.

    Row-level problems end up in ``errors`` ("Row 4: invalid amount 'x'");
    they never abort the run.
    """

    import_id: UUID
    transactions_imported: int = 0
    transactions_matched: int = 0
    duplicates_skipped: int = 0
    errors: list[str] = field(default_factory=list)
    file_name: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def record_error(self, row_number: int, message: str) -> None:
        self.errors.append(f"Row {row_number}: {message}")

    def to_dict(self) -> dict:
        return {
            "import_id": str(self.import_id),
            "transactions_imported": self.transactions_imported,
            "transactions_matched": self.transactions_matched,
            "duplicates_skipped": self.duplicates_skipped,
            "errors": list(self.errors),
        }
