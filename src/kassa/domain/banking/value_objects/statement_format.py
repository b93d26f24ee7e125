"""Statement format tags."""

from enum import Enum


class StatementFormat(str, Enum):
    """Known bank export layouts.

    Every tag has an entry in the format catalog. Tags without a dedicated
    layout resolve to the generic mapping.
    """

    GENERIC = "GENERIC"
    SWEDBANK_EE = "SWEDBANK_EE"
    SEB_EE = "SEB_EE"
    LHV_EE = "LHV_EE"

    @classmethod
    def parse(cls, value: str | None) -> "StatementFormat":
        """Resolve a user supplied tag, falling back to GENERIC."""
        if not value:
            return cls.GENERIC
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.GENERIC
