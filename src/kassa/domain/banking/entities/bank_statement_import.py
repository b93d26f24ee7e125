"""Bank statement import audit record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from kassa.domain.shared.time import utc_now


@dataclass(frozen=True)
class BankStatementImport:
    """Immutable summary of one import run.

    Written once when the run finishes; ``transactions_matched`` is the only
    counter that auto-matching may raise afterwards.
    """

    tenant_id: UUID
    bank_account_id: UUID
    file_name: str
    transactions_imported: int = 0
    transactions_matched: int = 0
    duplicates_skipped: int = 0
    errors: tuple[str, ...] = ()
    file_format: str = "CSV"
    created_by: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def rows_seen(self) -> int:
        return self.transactions_imported + self.duplicates_skipped + self.error_count
