from kassa.presentation.api.routers.bank_accounts import router as bank_accounts_router
from kassa.presentation.api.routers.bank_transactions import (
    router as bank_transactions_router,
)
from kassa.presentation.api.routers.imports import router as imports_router
from kassa.presentation.api.routers.reconciliations import (
    router as reconciliations_router,
)

__all__ = [
    "bank_accounts_router",
    "bank_transactions_router",
    "imports_router",
    "reconciliations_router",
]
