"""Import bank statement exports into a bank account."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional
from uuid import UUID

from kassa.application.commands.banking.auto_match_transactions_command import (
    DEFAULT_AUTO_MATCH_CONFIDENCE,
    AutoMatchTransactionsCommand,
)
from kassa.application.dtos.banking import ImportResult
from kassa.application.services.transaction_import_service import (
    TransactionImportService,
)
from kassa.domain.banking.exceptions import StatementParseError
from kassa.domain.banking.services import (
    iter_statement_records,
    parse_statement_record,
    preview_rows,
    read_lines,
    resolve_mapping,
)

if TYPE_CHECKING:
    from kassa.application.factories import RepositoryFactory
    from kassa.domain.banking.services import MatcherConfig
    from kassa.domain.banking.value_objects import CSVColumnMapping, StatementFormat

logger = logging.getLogger(__name__)


class ImportStatementCommand:
    """Import a comma-separated bank export into one account.

    Bad rows are recorded as "Row N: ..." and skipped; they never abort the
    run. Stream failures do, and leave nothing behind once the caller rolls
    back. With ``skip_duplicates`` re-importing the same file is a no-op
    apart from the audit record.
    """

    def __init__(
        self,
        import_service: TransactionImportService,
        auto_match_command: AutoMatchTransactionsCommand,
    ):
        self._import_service = import_service
        self._auto_match = auto_match_command

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        matcher_config: Optional[MatcherConfig] = None,
        auto_match_min_confidence: float = DEFAULT_AUTO_MATCH_CONFIDENCE,
    ) -> ImportStatementCommand:
        return cls(
            import_service=TransactionImportService.from_factory(factory),
            auto_match_command=AutoMatchTransactionsCommand.from_factory(
                factory,
                matcher_config,
                min_confidence=auto_match_min_confidence,
            ),
        )

    async def execute(  # noqa: PLR0913
        self,
        account_id: UUID,
        stream: Iterable[str],
        file_name: str,
        mapping: Optional[CSVColumnMapping] = None,
        statement_format: Optional[StatementFormat | str] = None,
        skip_duplicates: bool = True,
        auto_match: bool = False,
    ) -> ImportResult:
        account = await self._import_service.load_account(account_id)

        if mapping is None:
            lines = read_lines(stream)
            header = preview_rows(lines, 1)
            mapping = resolve_mapping(header[0] if header else [], statement_format)
            stream = lines

        logger.debug(
            "Importing %s into account %s using %s mapping",
            file_name,
            account.id,
            mapping.format.value,
        )

        result = self._import_service.start(file_name)
        for record in iter_statement_records(stream, mapping):
            try:
                record.check_readable()
                line = parse_statement_record(record.fields, mapping)
            except StatementParseError as e:
                result.record_error(record.row_number, e.message)
                continue
            await self._import_service.import_line(
                account,
                line,
                result,
                skip_duplicates=skip_duplicates,
            )

        if auto_match and result.transactions_imported:
            result.transactions_matched = await self._auto_match.match_unmatched(
                account.id,
            )

        await self._import_service.finish(account, result, file_format="CSV")
        return result

