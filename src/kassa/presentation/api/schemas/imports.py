"""Statement import and preview schemas for API request/response models."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat


class ImportResultResponse(BaseModel):
    """Response schema for one import run.

    Row-level failures are listed in ``errors`` and do not fail the request.
    """

    import_id: UUID
    file_name: Optional[str] = None
    transactions_imported: int
    transactions_matched: int
    duplicates_skipped: int
    errors: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "import_id": "0b5e2f7a-8c1d-4e3f-a2b1-c9d8e7f6a5b4",
                "file_name": "statement-2025-01.csv",
                "transactions_imported": 41,
                "transactions_matched": 0,
                "duplicates_skipped": 2,
                "errors": ["Row 7: invalid amount 'n/a'"],
            },
        },
    )


class ImportRowsRequest(BaseModel):
    """Request schema for importing pre-parsed rows."""

    rows: list[dict[str, Any]] = Field(
        ...,
        description=(
            "Statement lines with transaction_date (ISO) and amount (decimal) "
            "plus optional value_date, description, reference, "
            "counterparty_name, counterparty_account, external_id. "
            "Invalid rows are reported, not rejected."
        ),
    )
    file_name: Optional[str] = Field(None, max_length=255)
    skip_duplicates: bool = True


class ImportHistoryItemResponse(BaseModel):
    """Audit record of a past import run."""

    id: UUID
    file_name: str
    file_format: str
    transactions_imported: int
    transactions_matched: int
    duplicates_skipped: int
    errors: list[str]
    created_by: Optional[UUID] = None
    created_at: datetime


class ImportHistoryResponse(BaseModel):
    """Latest import runs of an account, newest first."""

    imports: list[ImportHistoryItemResponse]
    total: int


class RowIssueResponse(BaseModel):
    """A validation failure pinned to a record and a field."""

    row_number: int = Field(..., description="1-based record number in the file")
    field: str
    column: Optional[int] = Field(None, description="0-based column index")
    message: str


class StatementPreviewResponse(BaseModel):
    """First records of an export and what the importer would make of them."""

    detected_format: StatementFormat
    mapping: CSVColumnMapping
    header: list[str]
    rows: list[list[str]]
    issues: list[RowIssueResponse]
    is_valid: bool