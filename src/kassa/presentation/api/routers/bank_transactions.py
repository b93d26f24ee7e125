"""Bank transactions router: listing, match suggestions and matching."""

import logging
from datetime import date
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from kassa.application.commands.banking import (
    AddTransactionToReconciliationCommand,
    CreatePaymentFromTransactionCommand,
    MatchTransactionCommand,
    UnmatchTransactionCommand,
)
from kassa.application.queries.banking import (
    DEFAULT_TRANSACTION_LIMIT,
    GetBankTransactionQuery,
    ListBankTransactionsQuery,
    SuggestMatchesQuery,
)
from kassa.domain.banking.entities import BankTransaction, Payment
from kassa.domain.banking.services import MAX_SUGGESTIONS
from kassa.domain.banking.value_objects import TransactionStatus
from kassa.presentation.api.dependencies import MatcherSettings, RepoFactory
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

logger = logging.getLogger(__name__)

router = APIRouter()

AccountFilter = Annotated[
    Optional[UUID],
    Query(description="Only transactions of this bank account"),
]
StatusFilter = Annotated[
    Optional[TransactionStatus],
    Query(alias="status", description="UNMATCHED, MATCHED or RECONCILED"),
]
FromDateFilter = Annotated[
    Optional[date],
    Query(description="Earliest transaction date (inclusive)"),
]
ToDateFilter = Annotated[
    Optional[date],
    Query(description="Latest transaction date (inclusive)"),
]
MinAmountFilter = Annotated[
    Optional[Decimal],
    Query(description="Smallest signed amount (inclusive)"),
]
MaxAmountFilter = Annotated[
    Optional[Decimal],
    Query(description="Largest signed amount (inclusive)"),
]
LimitFilter = Annotated[
    int,
    Query(ge=1, le=1000, description="Maximum transactions to return"),
]
SuggestionLimit = Annotated[
    int,
    Query(ge=1, le=MAX_SUGGESTIONS, description="Maximum suggestions to return"),
]


def transaction_to_response(transaction: BankTransaction) -> BankTransactionResponse:
    return BankTransactionResponse(
        id=transaction.id,
        bank_account_id=transaction.bank_account_id,
        transaction_date=transaction.transaction_date,
        value_date=transaction.value_date,
        amount=transaction.amount,
        currency=transaction.currency,
        description=transaction.description,
        reference=transaction.reference,
        counterparty_name=transaction.counterparty_name,
        counterparty_account=transaction.counterparty_account,
        external_id=transaction.external_id,
        status=transaction.status,
        matched_payment_id=transaction.matched_payment_id,
        matched_at=transaction.matched_at,
        reconciliation_id=transaction.reconciliation_id,
        import_id=transaction.import_id,
        imported_at=transaction.imported_at,
    )


def _payment_to_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(
        id=payment.id,
        payment_number=payment.payment_number,
        payment_type=payment.payment_type,
        payment_date=payment.payment_date,
        amount=payment.amount,
        currency=payment.currency,
        reference=payment.reference,
        contact_name=payment.contact_name,
    )


@router.get(
    "",
    summary="List bank transactions",
    responses={
        200: {"description": "Transactions, newest first"},
    },
)
async def list_bank_transactions(  # noqa: PLR0913
    factory: RepoFactory,
    bank_account_id: AccountFilter = None,
    status_filter: StatusFilter = None,
    from_date: FromDateFilter = None,
    to_date: ToDateFilter = None,
    min_amount: MinAmountFilter = None,
    max_amount: MaxAmountFilter = None,
    limit: LimitFilter = DEFAULT_TRANSACTION_LIMIT,
) -> BankTransactionListResponse:
    """
    List imported bank transactions.

    Ordered by transaction date, newest first; ties by import time.
    """
    query = ListBankTransactionsQuery.from_factory(factory)
    transactions = await query.execute(
        bank_account_id=bank_account_id,
        status=status_filter,
        from_date=from_date,
        to_date=to_date,
        min_amount=min_amount,
        max_amount=max_amount,
        limit=limit,
    )
    return BankTransactionListResponse(
        transactions=[transaction_to_response(t) for t in transactions],
        count=len(transactions),
    )


@router.get(
    "/{transaction_id}",
    summary="Get bank transaction",
    responses={
        200: {"description": "Bank transaction"},
        404: {"description": "Bank transaction not found"},
    },
)
async def get_bank_transaction(
    transaction_id: UUID,
    factory: RepoFactory,
) -> BankTransactionResponse:
    """Get one imported bank transaction."""
    query = GetBankTransactionQuery.from_factory(factory)
    return transaction_to_response(await query.execute(transaction_id))


@router.get(
    "/{transaction_id}/suggestions",
    summary="Suggest matching payments",
    responses={
        200: {"description": "Candidate payments, best first"},
        404: {"description": "Bank transaction not found"},
    },
)
async def suggest_matches(
    transaction_id: UUID,
    factory: RepoFactory,
    matcher_config: MatcherSettings,
    limit: SuggestionLimit = MAX_SUGGESTIONS,
) -> MatchSuggestionListResponse:
    """
    Rank payments that may correspond to a transaction.

    ## Scoring

    Candidates share the transaction's direction, lie within the amount
    tolerance and are not linked to another transaction. The confidence
    adds up:

    - **Amount**: exact amount bonus, or a share of it inside the tolerance
    - **Date**: closeness of payment and transaction dates
    - **Reference**: payment reference found in the statement text
    - **Name**: similarity of contact and counterparty names

    Only transactions that are still UNMATCHED get suggestions.
    """
    query = SuggestMatchesQuery.from_factory(factory, matcher_config)
    suggestions = await query.execute(transaction_id, limit=limit)
    return MatchSuggestionListResponse(
        transaction_id=transaction_id,
        suggestions=[
            MatchSuggestionResponse(
                payment_id=s.payment_id,
                payment_number=s.payment_number,
                payment_date=s.payment_date,
                amount=s.amount,
                contact_name=s.contact_name,
                reference=s.reference,
                confidence=s.confidence,
                match_reason=s.match_reason,
            )
            for s in suggestions
        ],
    )


@router.post(
    "/{transaction_id}/match",
    summary="Match transaction to payment",
    responses={
        200: {"description": "Transaction matched"},
        404: {"description": "Transaction or payment not found"},
        409: {"description": "Transaction is not unmatched"},
    },
)
async def match_transaction(
    transaction_id: UUID,
    request: MatchRequest,
    factory: RepoFactory,
) -> BankTransactionResponse:
    """
    Link an UNMATCHED transaction to a payment.

    Of two concurrent requests for the same transaction exactly one wins;
    the other receives 409.
    """
    command = MatchTransactionCommand.from_factory(factory)

    try:
        transaction = await command.execute(transaction_id, request.payment_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return transaction_to_response(transaction)


@router.post(
    "/{transaction_id}/unmatch",
    summary="Unmatch transaction",
    responses={
        200: {"description": "Transaction unmatched"},
        404: {"description": "Bank transaction not found"},
        409: {"description": "Transaction is not matched (or already reconciled)"},
    },
)
async def unmatch_transaction(
    transaction_id: UUID,
    factory: RepoFactory,
) -> BankTransactionResponse:
    """Remove the payment link of a MATCHED transaction."""
    command = UnmatchTransactionCommand.from_factory(factory)

    try:
        transaction = await command.execute(transaction_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return transaction_to_response(transaction)


@router.post(
    "/{transaction_id}/create-payment",
    status_code=status.HTTP_201_CREATED,
    summary="Create payment from transaction",
    responses={
        201: {"description": "Payment created and matched"},
        404: {"description": "Bank transaction not found"},
        409: {"description": "Transaction is not unmatched"},
    },
)
async def create_payment_from_transaction(
    transaction_id: UUID,
    factory: RepoFactory,
) -> CreatePaymentResponse:
    """
    Record a payment for a transaction that has no counterpart.

    Inflows become RECEIVED payments (`PMT-000001`), outflows MADE payments
    (`PAY-000001`). The transaction is matched to the new payment.
    """
    command = CreatePaymentFromTransactionCommand.from_factory(factory)

    try:
        result = await command.execute(transaction_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return CreatePaymentResponse(
        payment=_payment_to_response(result.payment),
        transaction=transaction_to_response(result.transaction),
    )


@router.post(
    "/{transaction_id}/reconciliation",
    summary="Tag transaction with reconciliation",
    responses={
        200: {"description": "Transaction tagged"},
        404: {"description": "Transaction or reconciliation not found"},
        409: {"description": "Reconciliation completed or transaction reconciled"},
        422: {"description": "Reconciliation belongs to another account"},
    },
)
async def add_to_reconciliation(
    transaction_id: UUID,
    request: ReconciliationAssignRequest,
    factory: RepoFactory,
) -> BankTransactionResponse:
    """Tag a transaction with an in-progress reconciliation session."""
    command = AddTransactionToReconciliationCommand.from_factory(factory)

    try:
        transaction = await command.execute(
            transaction_id,
            request.reconciliation_id,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return transaction_to_response(transaction)
