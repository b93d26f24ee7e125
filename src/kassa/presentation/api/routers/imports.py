"""Imports router: statement preview and validation before import."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Form, UploadFile

from kassa.application.queries.banking import PreviewStatementQuery
from kassa.presentation.api.dependencies import APISettings
from kassa.presentation.api.routers.bank_accounts import read_upload
from kassa.presentation.api.schemas.imports import (
    RowIssueResponse,
    StatementPreviewResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/preview",
    summary="Preview CSV statement",
    responses={
        200: {"description": "Detected layout, first rows and row errors"},
        400: {"description": "Statement file could not be read"},
        413: {"description": "File too large"},
    },
)
async def preview_statement(
    file: UploadFile,
    settings: APISettings,
    statement_format: Annotated[
        Optional[str],
        Form(alias="format", description="Override the detected layout"),
    ] = None,
    validate_all: Annotated[
        bool,
        Form(description="Validate every row, not only the previewed ones"),
    ] = True,
) -> StatementPreviewResponse:
    """
    Preview a statement without importing it.

    Returns the detected format, the column mapping that would be used, the
    first rows as read from the file and every row that would fail to
    import, with the field and column at fault. Nothing is stored.
    """
    stream = await read_upload(file, settings.import_max_file_bytes)
    query = PreviewStatementQuery(max_rows=settings.import_preview_max_rows)
    preview = query.execute(
        stream,
        statement_format=statement_format,
        validate_all=validate_all,
    )

    logger.debug(
        "Previewed %s: format %s, %d issue(s)",
        file.filename,
        preview.detected_format.value,
        len(preview.issues),
    )
    return StatementPreviewResponse(
        detected_format=preview.detected_format,
        mapping=preview.mapping,
        header=preview.header,
        rows=preview.rows,
        issues=[
            RowIssueResponse(
                row_number=issue.row_number,
                field=issue.field,
                column=issue.column,
                message=issue.message,
            )
            for issue in preview.issues
        ],
        is_valid=preview.is_valid,
    )
