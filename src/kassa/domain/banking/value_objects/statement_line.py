"""Parsed statement line value object."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class StatementLine(BaseModel):
    """One statement row after locale-aware parsing.

    This is the candidate for a new bank transaction before the importer
    checks it against what the account already holds.
    """

    transaction_date: date
    value_date: date | None = None
    amount: Decimal
    description: str = Field(default="")
    reference: str = Field(default="")
    counterparty_name: str = Field(default="")
    counterparty_account: str = Field(default="")
    external_id: str = Field(default="")

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )
