"""Payment direction."""

from decimal import Decimal
from enum import Enum


class PaymentType(str, Enum):
    """Direction of a recorded payment."""

    RECEIVED = "RECEIVED"
    MADE = "MADE"

    @classmethod
    def for_amount(cls, amount: Decimal) -> "PaymentType":
        """Inflows (positive amounts) are received, outflows are made."""
        return cls.MADE if amount < 0 else cls.RECEIVED

    @property
    def number_prefix(self) -> str:
        return "PAY" if self == PaymentType.MADE else "PMT"
