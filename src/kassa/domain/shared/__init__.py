"""Shared domain components.

Exceptions and time helpers used by every bounded context.
"""

from kassa.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from kassa.domain.shared.time import days_between, ensure_tz_aware, today_utc, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "ConflictError",
    # Utilities
    "days_between",
    "ensure_tz_aware",
    "today_utc",
    "utc_now",
]
