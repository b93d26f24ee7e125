"""Banking domain exceptions.

This module defines exceptions specific to the banking bounded context:
statement parsing, missing entities and reconciliation state conflicts.

Parse errors are row-level and are collected by the importer instead of
aborting the run. Everything else aborts the operation it belongs to.
"""

from typing import Any, Optional
from uuid import UUID

from kassa.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)

# =============================================================================
# Statement Parse Exceptions
# =============================================================================


class StatementParseError(ValidationError):
    """Base class for errors that point at one field of one statement row.

    ``field`` names the semantic field (``date``, ``amount``), ``column`` the
    0-based column index the mapping assigned to it and ``raw`` the offending
    text, when there was any.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        field: str,
        column: Optional[int] = None,
        raw: Optional[str] = None,
    ) -> None:
        details: dict[str, Any] = {"field": field}
        if column is not None:
            details["column"] = column
        if raw is not None:
            details["raw"] = raw
        super().__init__(message=message, code=code, details=details)
        self.field = field
        self.column = column
        self.raw = raw


class InvalidAmountError(StatementParseError):
    """Raised when an amount cannot be read as a decimal number."""

    def __init__(self, raw: str, column: Optional[int] = None) -> None:
        super().__init__(
            message=f"invalid amount '{raw}'",
            code=ErrorCode.INVALID_AMOUNT,
            field="amount",
            column=column,
            raw=raw,
        )


class InvalidDateError(StatementParseError):
    """Raised when a date does not match the expected format(s)."""

    def __init__(
        self,
        raw: str,
        column: Optional[int] = None,
        expected_format: Optional[str] = None,
    ) -> None:
        message = f"invalid date '{raw}'"
        if expected_format:
            message = f"{message} (expected format {expected_format})"
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_DATE,
            field="date",
            column=column,
            raw=raw,
        )
        self.expected_format = expected_format


class DateColumnMissingError(StatementParseError):
    """Raised when a row is too short to hold the mapped date column."""

    def __init__(self, column: int) -> None:
        super().__init__(
            message=f"missing date column (index {column})",
            code=ErrorCode.DATE_COLUMN_MISSING,
            field="date",
            column=column,
        )


class AmountColumnMissingError(StatementParseError):
    """Raised when a row is too short to hold the mapped amount column."""

    def __init__(self, column: int) -> None:
        super().__init__(
            message=f"missing amount column (index {column})",
            code=ErrorCode.AMOUNT_COLUMN_MISSING,
            field="amount",
            column=column,
        )


class MalformedRecordError(StatementParseError):
    """Raised when a record cannot be split into fields.

    Only the record is lost; reading continues with the next one.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"malformed record: {reason}",
            code=ErrorCode.MALFORMED_RECORD,
            field="record",
        )


# =============================================================================
# Stream Exceptions
# =============================================================================


class StatementStreamError(DomainException):
    """Raised when the statement stream itself cannot be read.

    Distinct from parse errors: the import stops immediately and nothing
    it produced is kept.
    """

    def __init__(self, message: str = "Statement file could not be read") -> None:
        super().__init__(message=message, code=ErrorCode.STATEMENT_UNREADABLE)


# =============================================================================
# Not Found Exceptions
# =============================================================================


class BankAccountNotFoundError(EntityNotFoundError):
    """Raised when a bank account is unknown to the tenant."""

    def __init__(self, account_id: UUID) -> None:
        super().__init__(
            message=f"Bank account not found: {account_id}",
            code=ErrorCode.BANK_ACCOUNT_NOT_FOUND,
            details={"account_id": str(account_id)},
        )
        self.account_id = account_id


class BankTransactionNotFoundError(EntityNotFoundError):
    """Raised when a bank transaction is unknown to the tenant."""

    def __init__(self, transaction_id: UUID) -> None:
        super().__init__(
            message=f"Bank transaction not found: {transaction_id}",
            code=ErrorCode.TRANSACTION_NOT_FOUND,
            details={"transaction_id": str(transaction_id)},
        )
        self.transaction_id = transaction_id


class ReconciliationNotFoundError(EntityNotFoundError):
    """Raised when a reconciliation session is unknown to the tenant."""

    def __init__(self, reconciliation_id: UUID) -> None:
        super().__init__(
            message=f"Reconciliation not found: {reconciliation_id}",
            code=ErrorCode.RECONCILIATION_NOT_FOUND,
            details={"reconciliation_id": str(reconciliation_id)},
        )
        self.reconciliation_id = reconciliation_id


class PaymentNotFoundError(EntityNotFoundError):
    """Raised when a payment is unknown to the tenant."""

    def __init__(self, payment_id: UUID) -> None:
        super().__init__(
            message=f"Payment not found: {payment_id}",
            code=ErrorCode.PAYMENT_NOT_FOUND,
            details={"payment_id": str(payment_id)},
        )
        self.payment_id = payment_id


# =============================================================================
# State Conflict Exceptions
# =============================================================================


class TransactionStateConflictError(ConflictError):
    """Raised when a transaction is not in the status an operation requires."""

    def __init__(
        self,
        transaction_id: UUID,
        expected_status: str,
        actual_status: Optional[str] = None,
    ) -> None:
        message = (
            f"Bank transaction {transaction_id} is not {expected_status.lower()}"
        )
        if actual_status:
            message = f"{message} (status: {actual_status})"
        super().__init__(
            message=message,
            code=ErrorCode.TRANSACTION_STATE_CONFLICT,
            details={
                "transaction_id": str(transaction_id),
                "expected_status": expected_status,
                "actual_status": actual_status,
            },
        )
        self.transaction_id = transaction_id


class ReconciliationStateConflictError(ConflictError):
    """Raised when a reconciliation is no longer in progress."""

    def __init__(self, reconciliation_id: UUID) -> None:
        super().__init__(
            message=f"Reconciliation {reconciliation_id} is not in progress",
            code=ErrorCode.RECONCILIATION_STATE_CONFLICT,
            details={"reconciliation_id": str(reconciliation_id)},
        )
        self.reconciliation_id = reconciliation_id


class BankAccountInUseError(ConflictError):
    """Raised when deleting a bank account that still owns transactions."""

    def __init__(self, account_id: UUID, transaction_count: int) -> None:
        super().__init__(
            message=(
                f"Cannot delete bank account {account_id}: "
                f"it has {transaction_count} transaction(s)"
            ),
            code=ErrorCode.BANK_ACCOUNT_IN_USE,
            details={
                "account_id": str(account_id),
                "transaction_count": transaction_count,
            },
        )
        self.account_id = account_id


# =============================================================================
# Business Rule Exceptions
# =============================================================================


class ReconciliationAccountMismatchError(BusinessRuleViolation):
    """Raised when a transaction is tagged with another account's session."""

    def __init__(self, transaction_id: UUID, reconciliation_id: UUID) -> None:
        super().__init__(
            message=(
                f"Bank transaction {transaction_id} does not belong to the "
                f"account of reconciliation {reconciliation_id}"
            ),
            details={
                "transaction_id": str(transaction_id),
                "reconciliation_id": str(reconciliation_id),
            },
        )
        self.transaction_id = transaction_id
        self.reconciliation_id = reconciliation_id
