"""SQLAlchemy implementation of BankAccountRepository."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.entities import BankAccount
from kassa.domain.banking.repositories import BankAccountRepository
from kassa.domain.shared.time import utc_now
from kassa.infrastructure.persistence.sqlalchemy.models import (
    BankAccountModel,
    BankTransactionModel,
)
from kassa.infrastructure.persistence.sqlalchemy.repositories._utils import to_money

if TYPE_CHECKING:
    from kassa.application.context import TenantContext

logger = logging.getLogger(__name__)


class BankAccountRepositorySQLAlchemy(BankAccountRepository):
    """SQLAlchemy implementation of bank account repository."""

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant_id = tenant.tenant_id

    async def save(self, account: BankAccount) -> None:
        model = await self._find_model_by_id(account.id)

        if model:
            logger.debug("Updating existing bank account: %s", account.id)
            self._update_model_from_domain(model, account)
        else:
            logger.debug("Creating new bank account: %s", account.id)
            model = self._create_model_from_domain(account)
            self._session.add(model)

        await self._session.flush()

    async def find_by_id(self, account_id: UUID) -> Optional[BankAccount]:
        model = await self._find_model_by_id(account_id)

        if not model:
            return None

        return self._map_to_domain(model)

    async def find_all(
        self,
        is_active: Optional[bool] = None,
        currency: Optional[str] = None,
    ) -> list[BankAccount]:
        stmt = select(BankAccountModel).where(
            BankAccountModel.tenant_id == self._tenant_id,
        )
        if is_active is not None:
            stmt = stmt.where(BankAccountModel.is_active == is_active)
        if currency:
            stmt = stmt.where(BankAccountModel.currency == currency)
        stmt = stmt.order_by(
            BankAccountModel.is_default.desc(),
            BankAccountModel.name,
        )

        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def clear_default(self, except_account_id: Optional[UUID] = None) -> int:
        stmt = update(BankAccountModel).where(
            BankAccountModel.tenant_id == self._tenant_id,
            BankAccountModel.is_default.is_(True),
        )
        if except_account_id is not None:
            stmt = stmt.where(BankAccountModel.id != except_account_id)

        result = await self._session.execute(
            stmt.values(is_default=False, updated_at=utc_now()),
        )
        return result.rowcount

    async def delete(self, account_id: UUID) -> bool:
        result = await self._session.execute(
            delete(BankAccountModel).where(
                BankAccountModel.tenant_id == self._tenant_id,
                BankAccountModel.id == account_id,
            ),
        )
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Bank account deleted: %s", account_id)
        return deleted

    async def count_transactions(self, account_id: UUID) -> int:
        stmt = select(func.count(BankTransactionModel.id)).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.bank_account_id == account_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def calculate_balance(self, account_id: UUID) -> Decimal:
        stmt = select(func.sum(BankTransactionModel.amount)).where(
            BankTransactionModel.tenant_id == self._tenant_id,
            BankTransactionModel.bank_account_id == account_id,
        )
        result = await self._session.execute(stmt)
        return to_money(result.scalar_one())

    async def _find_model_by_id(self, account_id: UUID) -> Optional[BankAccountModel]:
        stmt = select(BankAccountModel).where(
            BankAccountModel.tenant_id == self._tenant_id,
            BankAccountModel.id == account_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _create_model_from_domain(self, account: BankAccount) -> BankAccountModel:
        return BankAccountModel(
            id=account.id,
            tenant_id=self._tenant_id,
            name=account.name,
            account_number=account.account_number,
            bank_name=account.bank_name,
            swift_code=account.swift_code,
            currency=account.currency,
            gl_account_id=account.gl_account_id,
            is_default=account.is_default,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model_from_domain(
        self,
        model: BankAccountModel,
        account: BankAccount,
    ) -> None:
        model.name = account.name
        model.bank_name = account.bank_name
        model.swift_code = account.swift_code
        model.gl_account_id = account.gl_account_id
        model.is_default = account.is_default
        model.is_active = account.is_active
        model.updated_at = account.updated_at

    def _map_to_domain(self, model: BankAccountModel) -> BankAccount:
        return BankAccount(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            account_number=model.account_number,
            bank_name=model.bank_name,
            swift_code=model.swift_code,
            currency=model.currency,
            gl_account_id=model.gl_account_id,
            is_default=model.is_default,
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
