"""Map domain exceptions to HTTP error responses.

Status codes come from ``ERROR_CODE_TO_STATUS``, falling back to the
exception category. Statement parse errors also name the field and column.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Every outgoing message passes through ``sanitize_message`` first.

Usage:
    from kassa.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from kassa.domain.banking.exceptions import StatementParseError
from kassa.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from kassa.presentation.api.error_sanitizer import (
    GENERIC_ERROR_MESSAGE,
    sanitize_message,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation and parse errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CURRENCY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DATE_COLUMN_MISSING: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AMOUNT_COLUMN_MISSING: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MALFORMED_RECORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STATEMENT_UNREADABLE: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BANK_ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TRANSACTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RECONCILIATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PAYMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - state transitions lost or refused
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.TRANSACTION_STATE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.RECONCILIATION_STATE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.BANK_ACCOUNT_IN_USE: status.HTTP_409_CONFLICT,
    # 422 Unprocessable Entity - business rule violations
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    # First try error code mapping
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    # Fallback based on exception type hierarchy
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolation):
        return status.HTTP_422_UNPROCESSABLE_ENTITY

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    **extra: object,
) -> JSONResponse:
    """Create a standardized error response with a sanitized message."""
    content: dict[str, object] = {
        "detail": sanitize_message(message),
        "code": code,
    }
    content.update({k: v for k, v in extra.items() if v is not None})
    return JSONResponse(status_code=status_code, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain, parse-error and catch-all handlers on ``app``."""

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = _get_status_for_exception(exc)
        # details are logged, never returned
        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(StatementParseError)
    async def statement_parse_exception_handler(
        request: Request,
        exc: StatementParseError,
    ) -> JSONResponse:
        """Handle parse errors that escape row collection.

        The offending field and column are returned so clients can point at
        the cell; the raw text is only logged.
        """
        logger.info(
            "Statement parse error on %s %s: %s (field=%s, column=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.field,
            exc.column,
        )
        return _create_error_response(
            status_code=_get_status_for_exception(exc),
            message=exc.message,
            code=exc.code.value,
            field=exc.field,
            column=exc.column,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Anything else is a 500 with the generic message."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=GENERIC_ERROR_MESSAGE,
            code=ErrorCode.INTERNAL_ERROR.value,
        )
