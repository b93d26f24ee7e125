"""SQLAlchemy repository factory for creating tenant-scoped repositories."""

from __future__ import annotations

import logging
from decimal import Decimal
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from kassa.domain.banking.services import MatcherConfig
from kassa.infrastructure.persistence.sqlalchemy.repositories.banking import (
    BankAccountRepositorySQLAlchemy,
    BankReconciliationRepositorySQLAlchemy,
    BankStatementImportRepositorySQLAlchemy,
    BankTransactionRepositorySQLAlchemy,
    PaymentRepositorySQLAlchemy,
)
from kassa_config.settings import get_settings

if TYPE_CHECKING:
    from kassa.application.context import TenantContext

logger = logging.getLogger(__name__)


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol.

    One factory per unit of work: every repository it hands out shares the
    session and the tenant scope.
    """

    def __init__(self, session: AsyncSession, tenant: TenantContext):
        self._session = session
        self._tenant = tenant

        # Cached instances (created on demand)
        self._account_repo: BankAccountRepositorySQLAlchemy | None = None
        self._transaction_repo: BankTransactionRepositorySQLAlchemy | None = None
        self._reconciliation_repo: BankReconciliationRepositorySQLAlchemy | None = None
        self._import_repo: BankStatementImportRepositorySQLAlchemy | None = None
        self._payment_repo: PaymentRepositorySQLAlchemy | None = None

    @property
    def tenant(self) -> TenantContext:
        return self._tenant

    @property
    def session(self) -> AsyncSession:
        return self._session

    def bank_account_repository(self) -> BankAccountRepositorySQLAlchemy:
        if self._account_repo is None:
            self._account_repo = BankAccountRepositorySQLAlchemy(
                self._session,
                self._tenant,
            )
        return self._account_repo

    def bank_transaction_repository(self) -> BankTransactionRepositorySQLAlchemy:
        if self._transaction_repo is None:
            self._transaction_repo = BankTransactionRepositorySQLAlchemy(
                self._session,
                self._tenant,
            )
        return self._transaction_repo

    def reconciliation_repository(self) -> BankReconciliationRepositorySQLAlchemy:
        if self._reconciliation_repo is None:
            self._reconciliation_repo = BankReconciliationRepositorySQLAlchemy(
                self._session,
                self._tenant,
            )
        return self._reconciliation_repo

    def statement_import_repository(self) -> BankStatementImportRepositorySQLAlchemy:
        if self._import_repo is None:
            self._import_repo = BankStatementImportRepositorySQLAlchemy(
                self._session,
                self._tenant,
            )
        return self._import_repo

    def payment_repository(self) -> PaymentRepositorySQLAlchemy:
        if self._payment_repo is None:
            self._payment_repo = PaymentRepositorySQLAlchemy(
                self._session,
                self._tenant,
            )
        return self._payment_repo


@lru_cache(maxsize=1)
def create_matcher_config_from_settings() -> MatcherConfig:
    """Create the suggestion engine's tuning from application settings (cached)."""
    settings = get_settings()

    config = MatcherConfig(
        exact_amount_bonus=settings.match_exact_amount_bonus,
        date_proximity_weight=settings.match_date_weight,
        reference_match_weight=settings.match_reference_weight,
        name_match_weight=settings.match_name_weight,
        min_confidence=settings.match_min_confidence,
        max_date_diff_days=settings.match_max_date_diff_days,
        amount_tolerance=Decimal(str(settings.match_amount_tolerance)),
    )
    logger.debug("Matcher configuration: %s", config)
    return config
