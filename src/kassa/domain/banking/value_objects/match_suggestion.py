"""Match suggestion value object."""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class MatchSuggestion(BaseModel):
    """A payment that may correspond to a bank transaction.

    Computed on demand and never persisted. ``confidence`` is a heuristic
    score between 0 and 1, not a probability.
    """

    payment_id: UUID
    payment_number: str
    payment_date: date
    amount: Decimal
    contact_name: str | None = None
    reference: str | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    match_reason: str = ""

    model_config = ConfigDict(frozen=True)

    @field_serializer("amount")
    def serialize_amount(self, value: Decimal) -> str:
        return str(value)
