"""SQLAlchemy implementation of BankStatementImportRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.entities import BankStatementImport
from kassa.domain.banking.repositories import (
    IMPORT_HISTORY_LIMIT,
    BankStatementImportRepository,
)
from kassa.infrastructure.persistence.sqlalchemy.models import BankStatementImportModel

if TYPE_CHECKING:
    from kassa.application.context import TenantContext


class BankStatementImportRepositorySQLAlchemy(BankStatementImportRepository):
    """SQLAlchemy implementation of the import audit store."""

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant_id = tenant.tenant_id

    async def add(self, statement_import: BankStatementImport) -> None:
        model = BankStatementImportModel(
            id=statement_import.id,
            tenant_id=self._tenant_id,
            bank_account_id=statement_import.bank_account_id,
            file_name=statement_import.file_name,
            file_format=statement_import.file_format,
            transactions_imported=statement_import.transactions_imported,
            transactions_matched=statement_import.transactions_matched,
            duplicates_skipped=statement_import.duplicates_skipped,
            errors=list(statement_import.errors),
            created_by=statement_import.created_by,
            created_at=statement_import.created_at,
        )
        self._session.add(model)
        await self._session.flush()

    async def find_by_account(
        self,
        bank_account_id: UUID,
        limit: int = IMPORT_HISTORY_LIMIT,
    ) -> list[BankStatementImport]:
        stmt = (
            select(BankStatementImportModel)
            .where(
                BankStatementImportModel.tenant_id == self._tenant_id,
                BankStatementImportModel.bank_account_id == bank_account_id,
            )
            .order_by(BankStatementImportModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def add_matched_to_latest(self, bank_account_id: UUID, matched: int) -> bool:
        latest = (
            select(BankStatementImportModel.id)
            .where(
                BankStatementImportModel.tenant_id == self._tenant_id,
                BankStatementImportModel.bank_account_id == bank_account_id,
            )
            .order_by(BankStatementImportModel.created_at.desc())
            .limit(1)
        )
        latest_id = (await self._session.execute(latest)).scalar_one_or_none()
        if latest_id is None:
            return False

        await self._session.execute(
            update(BankStatementImportModel)
            .where(BankStatementImportModel.id == latest_id)
            .values(
                transactions_matched=(
                    BankStatementImportModel.transactions_matched + matched
                ),
            )
            .execution_options(synchronize_session="fetch"),
        )
        return True

    def _map_to_domain(self, model: BankStatementImportModel) -> BankStatementImport:
        return BankStatementImport(
            id=model.id,
            tenant_id=model.tenant_id,
            bank_account_id=model.bank_account_id,
            file_name=model.file_name,
            file_format=model.file_format,
            transactions_imported=model.transactions_imported,
            transactions_matched=model.transactions_matched,
            duplicates_skipped=model.duplicates_skipped,
            errors=tuple(model.errors or ()),
            created_by=model.created_by,
            created_at=model.created_at,
        )
