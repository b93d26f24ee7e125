"""SQLAlchemy model for statement import audit records."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from kassa.domain.shared.time import utc_now
from kassa.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TenantMixin,
)


class BankStatementImportModel(Base, TenantMixin):
    """Database model for import runs. Rows are never rewritten.

    ``transactions_matched`` is the exception: auto-matching after an
    import credits its count to the latest run of the account.
    """

    __tablename__ = "bank_statement_imports"

    __table_args__ = (
        Index(
            "idx_bank_imports_account_created",
            "tenant_id",
            "bank_account_id",
            "created_at",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    bank_account_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("bank_accounts.id"),
        nullable=False,
    )

    file_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    file_format: Mapped[str] = mapped_column(String(10), nullable=False, default="CSV")

    transactions_imported: Mapped[int] = mapped_column(Integer, default=0)
    transactions_matched: Mapped[int] = mapped_column(Integer, default=0)
    duplicates_skipped: Mapped[int] = mapped_column(Integer, default=0)
    errors: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_by: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return (
            f"<BankStatementImportModel(id={self.id}, file={self.file_name}, "
            f"imported={self.transactions_imported})>"
        )
