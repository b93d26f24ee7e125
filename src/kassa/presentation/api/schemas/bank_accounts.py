"""Bank account schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BankAccountCreateRequest(BaseModel):
    """Request schema for creating a bank account."""

    name: str = Field(..., min_length=1, max_length=255)
    account_number: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Account number or IBAN as printed by the bank",
    )
    bank_name: Optional[str] = Field(None, max_length=255)
    swift_code: Optional[str] = Field(None, max_length=11)
    currency: Optional[str] = Field(
        None,
        min_length=3,
        max_length=3,
        description="ISO 4217 code, defaults to EUR",
    )
    gl_account_id: Optional[UUID] = Field(
        None,
        description="Ledger account this bank account posts to",
    )
    is_default: bool = Field(
        default=False,
        description="Make this the tenant's default account (clears the others)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Main operating account",
                "account_number": "EE382200221020145685",
                "bank_name": "Swedbank",
                "swift_code": "HABAEE2X",
                "currency": "EUR",
                "is_default": True,
            },
        },
    )


class BankAccountUpdateRequest(BaseModel):
    """Request schema for a partial bank account update.

    Only fields that are set are applied. The account number and currency
    are fixed once transactions reference the account.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    bank_name: Optional[str] = Field(None, max_length=255)
    swift_code: Optional[str] = Field(None, max_length=11)
    gl_account_id: Optional[UUID] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None


class BankAccountResponse(BaseModel):
    """Response schema for a bank account with its ledger balance."""

    id: UUID
    name: str
    account_number: str
    bank_name: Optional[str] = None
    swift_code: Optional[str] = None
    currency: str
    gl_account_id: Optional[UUID] = None
    is_default: bool
    is_active: bool
    balance: Decimal = Field(..., description="Sum of all imported transactions")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Main operating account",
                "account_number": "EE382200221020145685",
                "bank_name": "Swedbank",
                "swift_code": "HABAEE2X",
                "currency": "EUR",
                "gl_account_id": None,
                "is_default": True,
                "is_active": True,
                "balance": "1532.40",
                "created_at": "2025-01-02T09:00:00Z",
                "updated_at": "2025-01-02T09:00:00Z",
            },
        },
    )


class BankAccountListResponse(BaseModel):
    """Response schema for listing bank accounts."""

    accounts: list[BankAccountResponse]
    total: int


class AutoMatchRequest(BaseModel):
    """Request schema for auto-matching an account's unmatched transactions."""

    min_confidence: Optional[float] = Field(
        None,
        ge=0.0,
        le=1.0,
        description="Lowest confidence to accept (server default when omitted)",
    )


class AutoMatchResponse(BaseModel):
    """Response schema for an auto-match run."""

    account_id: UUID
    transactions_matched: int
