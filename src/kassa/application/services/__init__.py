"""Application layer services."""

from kassa.application.services.transaction_import_service import (
    TransactionImportService,
)

__all__ = [
    "TransactionImportService",
]
