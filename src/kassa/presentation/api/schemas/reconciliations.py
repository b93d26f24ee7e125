"""Reconciliation schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kassa.domain.banking.value_objects import ReconciliationStatus


class ReconciliationCreateRequest(BaseModel):
    """Request schema for opening a reconciliation session."""

    statement_date: date
    opening_balance: Decimal = Field(
        ..., description="Balance the statement opens with"
    )
    closing_balance: Decimal = Field(
        ..., description="Balance the statement closes with"
    )
    notes: Optional[str] = Field(None, max_length=2000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "statement_date": "2025-01-31",
                "opening_balance": "1000.00",
                "closing_balance": "1450.00",
                "notes": "January statement",
            },
        },
    )


class ReconciliationResponse(BaseModel):
    """Response schema for a reconciliation session."""

    id: UUID
    bank_account_id: UUID
    statement_date: date
    opening_balance: Decimal
    closing_balance: Decimal
    status: ReconciliationStatus
    reconciled_balance: Optional[Decimal] = Field(
        None,
        description="Opening balance plus reconciled amounts, set on completion",
    )
    notes: Optional[str] = None
    created_by: Optional[UUID] = None
    created_at: datetime
    completed_at: Optional[datetime] = None
    completed_by: Optional[UUID] = None


class ReconciliationListResponse(BaseModel):
    """Sessions of one account, latest statement first."""

    reconciliations: list[ReconciliationResponse]
    total: int


class ReconciliationSummaryResponse(BaseModel):
    """Advisory tie-out of declared balances against tagged transactions.

    ``is_balanced`` is informational; completion never requires it.
    """

    reconciliation_id: UUID
    status: ReconciliationStatus
    opening_balance: Decimal
    closing_balance: Decimal
    matched_total: Decimal
    matched_count: int
    unmatched_count: int
    computed_closing_balance: Decimal
    difference: Decimal
    is_balanced: bool
