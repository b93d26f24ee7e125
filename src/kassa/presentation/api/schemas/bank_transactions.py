"""Bank transaction schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kassa.domain.banking.value_objects import PaymentType, TransactionStatus


class BankTransactionResponse(BaseModel):
    """Response schema for one imported statement line."""

    id: UUID
    bank_account_id: UUID
    transaction_date: date
    value_date: Optional[date] = None
    amount: Decimal = Field(..., description="Signed; negative for outflows")
    currency: str
    description: str
    reference: str
    counterparty_name: str
    counterparty_account: str
    external_id: str
    status: TransactionStatus
    matched_payment_id: Optional[UUID] = None
    matched_at: Optional[datetime] = None
    reconciliation_id: Optional[UUID] = None
    import_id: Optional[UUID] = None
    imported_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "7d1f6c1e-5b7a-4c1e-9d0f-2a3b4c5d6e7f",
                "bank_account_id": "550e8400-e29b-41d4-a716-446655440000",
                "transaction_date": "2025-01-15",
                "value_date": "2025-01-15",
                "amount": "-45.99",
                "currency": "EUR",
                "description": "Office supplies",
                "reference": "INV-1042",
                "counterparty_name": "Paber OU",
                "counterparty_account": "EE471000001020145685",
                "external_id": "",
                "status": "UNMATCHED",
                "matched_payment_id": None,
                "matched_at": None,
                "reconciliation_id": None,
                "import_id": "0b5e2f7a-8c1d-4e3f-a2b1-c9d8e7f6a5b4",
                "imported_at": "2025-01-16T08:00:00Z",
            },
        },
    )


class BankTransactionListResponse(BaseModel):
    """Response schema for listing bank transactions."""

    transactions: list[BankTransactionResponse]
    count: int


class MatchSuggestionResponse(BaseModel):
    """A candidate payment with its heuristic confidence (0..1)."""

    payment_id: UUID
    payment_number: str
    payment_date: date
    amount: Decimal
    contact_name: Optional[str] = None
    reference: Optional[str] = None
    confidence: float
    match_reason: str


class MatchSuggestionListResponse(BaseModel):
    """Suggestions for one transaction, best first."""

    transaction_id: UUID
    suggestions: list[MatchSuggestionResponse]


class MatchRequest(BaseModel):
    """Request schema for matching a transaction to a payment."""

    payment_id: UUID


class ReconciliationAssignRequest(BaseModel):
    """Request schema for tagging a transaction with a reconciliation."""

    reconciliation_id: UUID


class PaymentResponse(BaseModel):
    """Response schema for a payment created from a bank transaction."""

    id: UUID
    payment_number: str = Field(..., description="PMT-nnnnnn or PAY-nnnnnn")
    payment_type: PaymentType
    payment_date: date
    amount: Decimal
    currency: str
    reference: Optional[str] = None
    contact_name: Optional[str] = None


class CreatePaymentResponse(BaseModel):
    """The new payment and the transaction it is now matched to."""

    payment: PaymentResponse
    transaction: BankTransactionResponse
