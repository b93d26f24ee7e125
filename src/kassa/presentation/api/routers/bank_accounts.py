"""Bank accounts router: account management, statement imports, reconciliations."""

import io
import logging
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Form, HTTPException, Query, UploadFile, status

from kassa.application.commands.banking import (
    AutoMatchTransactionsCommand,
    CreateBankAccountCommand,
    DeleteBankAccountCommand,
    ImportStatementCommand,
    ImportTransactionRowsCommand,
    OpenReconciliationCommand,
    UpdateBankAccountCommand,
)
from kassa.application.dtos.banking import BankAccountView, ImportResult
from kassa.application.queries.banking import (
    GetBankAccountQuery,
    ImportHistoryQuery,
    ListBankAccountsQuery,
    ListReconciliationsQuery,
)
from kassa.domain.banking.entities import BankStatementImport
from kassa.presentation.api.dependencies import (
    APISettings,
    MatcherSettings,
    RepoFactory,
)
from kassa.presentation.api.routers.reconciliations import reconciliation_to_response
from kassa.presentation.api.schemas.bank_accounts import (
    AutoMatchRequest,
    AutoMatchResponse,
    BankAccountCreateRequest,
    BankAccountListResponse,
    BankAccountResponse,
    BankAccountUpdateRequest,
)
from kassa.presentation.api.schemas.imports import (
    ImportHistoryItemResponse,
    ImportHistoryResponse,
    ImportResultResponse,
    ImportRowsRequest,
)
from kassa.presentation.api.schemas.reconciliations import (
    ReconciliationCreateRequest,
    ReconciliationListResponse,
    ReconciliationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ActiveFilter = Annotated[
    Optional[bool],
    Query(description="Only active (true) or only inactive (false) accounts"),
]
CurrencyFilter = Annotated[
    Optional[str],
    Query(min_length=3, max_length=3, description="ISO 4217 currency code"),
]
HistoryLimit = Annotated[
    int,
    Query(ge=1, le=50, description="Maximum import records to return"),
]


def _account_to_response(view: BankAccountView) -> BankAccountResponse:
    account = view.account
    return BankAccountResponse(
        id=account.id,
        name=account.name,
        account_number=account.account_number,
        bank_name=account.bank_name,
        swift_code=account.swift_code,
        currency=account.currency,
        gl_account_id=account.gl_account_id,
        is_default=account.is_default,
        is_active=account.is_active,
        balance=view.balance,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def _import_to_response(result: ImportResult) -> ImportResultResponse:
    return ImportResultResponse(
        import_id=result.import_id,
        file_name=result.file_name,
        transactions_imported=result.transactions_imported,
        transactions_matched=result.transactions_matched,
        duplicates_skipped=result.duplicates_skipped,
        errors=result.errors,
    )


def _history_to_response(record: BankStatementImport) -> ImportHistoryItemResponse:
    return ImportHistoryItemResponse(
        id=record.id,
        file_name=record.file_name,
        file_format=record.file_format,
        transactions_imported=record.transactions_imported,
        transactions_matched=record.transactions_matched,
        duplicates_skipped=record.duplicates_skipped,
        errors=list(record.errors),
        created_by=record.created_by,
        created_at=record.created_at,
    )


async def read_upload(file: UploadFile, max_bytes: int) -> io.TextIOWrapper:
    """Read an uploaded statement into a text stream.

    Decoding is lazy: undecodable bytes surface while the statement is read
    and are reported as an unreadable statement.
    """
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File too large (max {max_bytes // (1024 * 1024)}MB)",
        )
    return io.TextIOWrapper(io.BytesIO(content), encoding="utf-8-sig", newline="")


# =============================================================================
# Account management
# =============================================================================


@router.get(
    "",
    summary="List bank accounts",
    responses={
        200: {"description": "Bank accounts, default first, with balances"},
    },
)
async def list_bank_accounts(
    factory: RepoFactory,
    is_active: ActiveFilter = None,
    currency: CurrencyFilter = None,
) -> BankAccountListResponse:
    """
    List the tenant's bank accounts.

    Ordered default account first, then by name. Each account carries its
    balance, the sum of all its imported transactions.
    """
    query = ListBankAccountsQuery.from_factory(factory)
    views = await query.execute(is_active=is_active, currency=currency)
    return BankAccountListResponse(
        accounts=[_account_to_response(view) for view in views],
        total=len(views),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create bank account",
    responses={
        201: {"description": "Bank account created"},
        400: {"description": "Invalid input"},
    },
)
async def create_bank_account(
    request: BankAccountCreateRequest,
    factory: RepoFactory,
) -> BankAccountResponse:
    """
    Create a bank account.

    The currency defaults to EUR. Creating a default account clears the
    default flag on every other account of the tenant.
    """
    command = CreateBankAccountCommand.from_factory(factory)

    try:
        account = await command.execute(
            name=request.name,
            account_number=request.account_number,
            bank_name=request.bank_name,
            swift_code=request.swift_code,
            currency=request.currency,
            gl_account_id=request.gl_account_id,
            is_default=request.is_default,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    logger.info("Bank account created: %s (%s)", account.name, account.id)
    view = BankAccountView(account=account, balance=Decimal("0.00"))
    return _account_to_response(view)


@router.get(
    "/{account_id}",
    summary="Get bank account",
    responses={
        200: {"description": "Bank account with balance"},
        404: {"description": "Bank account not found"},
    },
)
async def get_bank_account(
    account_id: UUID,
    factory: RepoFactory,
) -> BankAccountResponse:
    """Get a bank account and its current balance."""
    query = GetBankAccountQuery.from_factory(factory)
    return _account_to_response(await query.execute(account_id))


@router.patch(
    "/{account_id}",
    summary="Update bank account",
    responses={
        200: {"description": "Bank account updated"},
        404: {"description": "Bank account not found"},
    },
)
async def update_bank_account(
    account_id: UUID,
    request: BankAccountUpdateRequest,
    factory: RepoFactory,
) -> BankAccountResponse:
    """
    Update a bank account.

    Only the fields present in the request are changed. Setting
    `is_default` clears the flag on all other accounts.
    """
    command = UpdateBankAccountCommand.from_factory(factory)
    fields = request.model_dump(exclude_unset=True)

    try:
        await command.execute(account_id, **fields)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    query = GetBankAccountQuery.from_factory(factory)
    return _account_to_response(await query.execute(account_id))


@router.delete(
    "/{account_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete bank account",
    responses={
        204: {"description": "Bank account deleted"},
        404: {"description": "Bank account not found"},
        409: {"description": "Bank account still has transactions"},
    },
)
async def delete_bank_account(
    account_id: UUID,
    factory: RepoFactory,
) -> None:
    """
    Delete a bank account.

    Refused with 409 while any transaction references the account;
    deactivate it instead.
    """
    command = DeleteBankAccountCommand.from_factory(factory)

    try:
        await command.execute(account_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise


# =============================================================================
# Statement imports
# =============================================================================


@router.get(
    "/{account_id}/imports",
    summary="List import history",
    responses={
        200: {"description": "Latest import runs, newest first"},
        404: {"description": "Bank account not found"},
    },
)
async def list_import_history(
    account_id: UUID,
    factory: RepoFactory,
    limit: HistoryLimit = 50,
) -> ImportHistoryResponse:
    """List the latest statement imports of an account."""
    query = ImportHistoryQuery.from_factory(factory)
    records = await query.execute(account_id, limit=limit)
    return ImportHistoryResponse(
        imports=[_history_to_response(record) for record in records],
        total=len(records),
    )


@router.post(
    "/{account_id}/import",
    status_code=status.HTTP_201_CREATED,
    summary="Import CSV statement",
    responses={
        201: {"description": "Import finished (row errors are listed, not raised)"},
        400: {"description": "Statement file could not be read"},
        404: {"description": "Bank account not found"},
        413: {"description": "File too large"},
    },
)
async def import_statement(  # noqa: PLR0913
    account_id: UUID,
    file: UploadFile,
    factory: RepoFactory,
    settings: APISettings,
    matcher_config: MatcherSettings,
    statement_format: Annotated[
        Optional[str],
        Form(alias="format", description="GENERIC, SWEDBANK_EE, SEB_EE or LHV_EE"),
    ] = None,
    skip_duplicates: Annotated[bool, Form()] = True,
    auto_match: Annotated[bool, Form()] = False,
) -> ImportResultResponse:
    """
    Import a bank statement CSV into an account.

    ## Behaviour

    - The layout is detected from the header row unless `format` is given
    - Rows that fail to parse are reported as `Row N: ...` and skipped
    - With `skip_duplicates` (default) re-uploading a file imports nothing
    - With `auto_match` unmatched transactions are matched to payments
      when the best suggestion is unambiguous

    An unreadable file aborts the import and nothing is stored.
    """
    stream = await read_upload(file, settings.import_max_file_bytes)
    command = ImportStatementCommand.from_factory(
        factory,
        matcher_config,
        auto_match_min_confidence=settings.auto_match_min_confidence,
    )

    try:
        result = await command.execute(
            account_id=account_id,
            stream=stream,
            file_name=file.filename or "statement.csv",
            statement_format=statement_format,
            skip_duplicates=skip_duplicates,
            auto_match=auto_match,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return _import_to_response(result)


@router.post(
    "/{account_id}/import/rows",
    status_code=status.HTTP_201_CREATED,
    summary="Import pre-parsed rows",
    responses={
        201: {"description": "Import finished (row errors are listed, not raised)"},
        404: {"description": "Bank account not found"},
    },
)
async def import_rows(
    account_id: UUID,
    request: ImportRowsRequest,
    factory: RepoFactory,
) -> ImportResultResponse:
    """
    Import statement lines that were parsed elsewhere.

    Dates are ISO (`2025-01-31`) and amounts canonical decimals (`-12.50`).
    Duplicate handling and the audit record work as for CSV uploads.
    """
    command = ImportTransactionRowsCommand.from_factory(factory)

    try:
        result = await command.execute(
            account_id=account_id,
            rows=request.rows,
            file_name=request.file_name,
            skip_duplicates=request.skip_duplicates,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return _import_to_response(result)


@router.post(
    "/{account_id}/auto-match",
    summary="Auto-match unmatched transactions",
    responses={
        200: {"description": "Number of transactions matched"},
        404: {"description": "Bank account not found"},
    },
)
async def auto_match_transactions(
    account_id: UUID,
    factory: RepoFactory,
    settings: APISettings,
    matcher_config: MatcherSettings,
    request: AutoMatchRequest | None = None,
) -> AutoMatchResponse:
    """
    Match every unmatched transaction whose best suggestion is unambiguous.

    A suggestion is taken when it clears `min_confidence` and the runner-up
    scores below 90% of it. The count is added to the latest import record.
    """
    command = AutoMatchTransactionsCommand.from_factory(
        factory,
        matcher_config,
        min_confidence=settings.auto_match_min_confidence,
    )
    min_confidence = request.min_confidence if request else None

    try:
        matched = await command.execute(account_id, min_confidence=min_confidence)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return AutoMatchResponse(account_id=account_id, transactions_matched=matched)


# =============================================================================
# Reconciliations
# =============================================================================


@router.post(
    "/{account_id}/reconciliations",
    status_code=status.HTTP_201_CREATED,
    summary="Open reconciliation",
    responses={
        201: {"description": "Reconciliation session opened"},
        404: {"description": "Bank account not found"},
    },
)
async def open_reconciliation(
    account_id: UUID,
    request: ReconciliationCreateRequest,
    factory: RepoFactory,
) -> ReconciliationResponse:
    """Open a reconciliation session for a statement period."""
    command = OpenReconciliationCommand.from_factory(factory)

    try:
        reconciliation = await command.execute(
            account_id=account_id,
            statement_date=request.statement_date,
            opening_balance=request.opening_balance,
            closing_balance=request.closing_balance,
            notes=request.notes,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return reconciliation_to_response(reconciliation)


@router.get(
    "/{account_id}/reconciliations",
    summary="List reconciliations",
    responses={
        200: {"description": "Sessions, latest statement first"},
        404: {"description": "Bank account not found"},
    },
)
async def list_reconciliations(
    account_id: UUID,
    factory: RepoFactory,
) -> ReconciliationListResponse:
    """List the reconciliation sessions of an account."""
    query = ListReconciliationsQuery.from_factory(factory)
    reconciliations = await query.execute(account_id)
    return ReconciliationListResponse(
        reconciliations=[reconciliation_to_response(r) for r in reconciliations],
        total=len(reconciliations),
    )
