"""Import pre-parsed transaction rows into a bank account."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from kassa.application.dtos.banking import ImportResult
from kassa.application.services.transaction_import_service import (
    TransactionImportService,
)
from kassa.domain.banking.value_objects import StatementLine

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory


def _describe_row_error(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "row"
    return f"invalid {field}: {first.get('msg', 'invalid value')}"


class ImportTransactionRowsCommand:
    """Import rows that were already split into fields by the client.

    Each row is a mapping with ``transaction_date`` (ISO date) and
    ``amount`` (canonical decimal) plus the optional text fields of a
    statement line. Invalid rows are reported like CSV row errors.
    """

    def __init__(self, import_service: TransactionImportService):
        self._import_service = import_service

    @classmethod
    def from_factory(cls, factory: RepositoryFactory) -> ImportTransactionRowsCommand:
        return cls(import_service=TransactionImportService.from_factory(factory))

    async def execute(
        self,
        account_id: UUID,
        rows: Sequence[Mapping[str, Any]],
        file_name: Optional[str] = None,
        skip_duplicates: bool = True,
    ) -> ImportResult:
        account = await self._import_service.load_account(account_id)

        result = self._import_service.start(file_name or "rows.json")
        for row_number, row in enumerate(rows, start=1):
            try:
                line = StatementLine.model_validate(row)
            except PydanticValidationError as e:
                result.record_error(row_number, _describe_row_error(e))
                continue
            await self._import_service.import_line(
                account,
                line,
                result,
                skip_duplicates=skip_duplicates,
            )

        await self._import_service.finish(account, result, file_format="JSON")
        return result
