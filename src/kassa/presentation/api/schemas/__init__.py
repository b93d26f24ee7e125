"""Pydantic schemas for API request/response models."""

from kassa.presentation.api.schemas.bank_accounts import (
    AutoMatchRequest,
    AutoMatchResponse,
    BankAccountCreateRequest,
    BankAccountListResponse,
    BankAccountResponse,
    BankAccountUpdateRequest,
)
from kassa.presentation.api.schemas.bank_transactions import (
    BankTransactionListResponse,
    BankTransactionResponse,
    CreatePaymentResponse,
    MatchRequest,
    MatchSuggestionListResponse,
    MatchSuggestionResponse,
    PaymentResponse,
    ReconciliationAssignRequest,
)
from kassa.presentation.api.schemas.common import ErrorResponse, HealthResponse
from kassa.presentation.api.schemas.imports import (
    ImportHistoryItemResponse,
    ImportHistoryResponse,
    ImportResultResponse,
    ImportRowsRequest,
    RowIssueResponse,
    StatementPreviewResponse,
)
from kassa.presentation.api.schemas.reconciliations import (
    ReconciliationCreateRequest,
    ReconciliationListResponse,
    ReconciliationResponse,
    ReconciliationSummaryResponse,
)

__all__ = [
    "AutoMatchRequest",
    "AutoMatchResponse",
    "BankAccountCreateRequest",
    "BankAccountListResponse",
    "BankAccountResponse",
    "BankAccountUpdateRequest",
    "BankTransactionListResponse",
    "BankTransactionResponse",
    "CreatePaymentResponse",
    "ErrorResponse",
    "HealthResponse",
    "ImportHistoryItemResponse",
    "ImportHistoryResponse",
    "ImportResultResponse",
    "ImportRowsRequest",
    "MatchRequest",
    "MatchSuggestionListResponse",
    "MatchSuggestionResponse",
    "PaymentResponse",
    "ReconciliationAssignRequest",
    "ReconciliationCreateRequest",
    "ReconciliationListResponse",
    "ReconciliationResponse",
    "ReconciliationSummaryResponse",
    "RowIssueResponse",
    "StatementPreviewResponse",
]
