"""Reconciliations router: session details, balance tie-out and completion."""

import logging
from uuid import UUID

from fastapi import APIRouter

from kassa.application.commands.banking import CompleteReconciliationCommand
from kassa.application.queries.banking import (
    GetReconciliationQuery,
    ReconciliationSummaryQuery,
)
from kassa.domain.banking.entities import BankReconciliation
from kassa.presentation.api.dependencies import RepoFactory
from kassa.presentation.api.schemas.reconciliations import (
    ReconciliationResponse,
    ReconciliationSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def reconciliation_to_response(
    reconciliation: BankReconciliation,
) -> ReconciliationResponse:
    return ReconciliationResponse(
        id=reconciliation.id,
        bank_account_id=reconciliation.bank_account_id,
        statement_date=reconciliation.statement_date,
        opening_balance=reconciliation.opening_balance,
        closing_balance=reconciliation.closing_balance,
        status=reconciliation.status,
        reconciled_balance=reconciliation.reconciled_balance,
        notes=reconciliation.notes,
        created_by=reconciliation.created_by,
        created_at=reconciliation.created_at,
        completed_at=reconciliation.completed_at,
        completed_by=reconciliation.completed_by,
    )


@router.get(
    "/{reconciliation_id}",
    summary="Get reconciliation",
    responses={
        200: {"description": "Reconciliation session"},
        404: {"description": "Reconciliation not found"},
    },
)
async def get_reconciliation(
    reconciliation_id: UUID,
    factory: RepoFactory,
) -> ReconciliationResponse:
    """Get a reconciliation session."""
    query = GetReconciliationQuery.from_factory(factory)
    return reconciliation_to_response(await query.execute(reconciliation_id))


@router.get(
    "/{reconciliation_id}/summary",
    summary="Get reconciliation tie-out",
    responses={
        200: {"description": "Declared versus computed balances"},
        404: {"description": "Reconciliation not found"},
    },
)
async def get_reconciliation_summary(
    reconciliation_id: UUID,
    factory: RepoFactory,
) -> ReconciliationSummaryResponse:
    """
    Compare the declared statement balances with the tagged transactions.

    `matched_total` sums MATCHED and RECONCILED transactions tagged with the
    session. The result is advisory: completing a session never requires
    `is_balanced`.
    """
    query = ReconciliationSummaryQuery.from_factory(factory)
    summary = await query.execute(reconciliation_id)
    reconciliation = summary.reconciliation

    return ReconciliationSummaryResponse(
        reconciliation_id=reconciliation.id,
        status=reconciliation.status,
        opening_balance=reconciliation.opening_balance,
        closing_balance=reconciliation.closing_balance,
        matched_total=summary.matched_total,
        matched_count=summary.matched_count,
        unmatched_count=summary.unmatched_count,
        computed_closing_balance=summary.computed_closing_balance,
        difference=summary.difference,
        is_balanced=summary.is_balanced,
    )


@router.post(
    "/{reconciliation_id}/complete",
    summary="Complete reconciliation",
    responses={
        200: {"description": "Session completed, matched transactions reconciled"},
        404: {"description": "Reconciliation not found"},
        409: {"description": "Reconciliation already completed"},
    },
)
async def complete_reconciliation(
    reconciliation_id: UUID,
    factory: RepoFactory,
) -> ReconciliationResponse:
    """
    Complete a reconciliation session.

    Every MATCHED transaction tagged with the session becomes RECONCILED
    and is locked. UNMATCHED transactions keep their status and tag.
    """
    command = CompleteReconciliationCommand.from_factory(factory)

    try:
        reconciliation = await command.execute(reconciliation_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return reconciliation_to_response(reconciliation)
