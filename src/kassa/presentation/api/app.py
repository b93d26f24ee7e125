"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    Future breaking changes will be introduced under /api/v2/, etc.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from kassa.infrastructure.persistence.sqlalchemy.models import Base
from kassa.presentation.api.dependencies import get_engine
from kassa.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from kassa.presentation.api.routers import (
    bank_accounts_router,
    bank_transactions_router,
    imports_router,
    reconciliations_router,
)
from kassa.presentation.api.schemas.common import HealthResponse
from kassa_config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
QUIET_LOGGERS = (
    "aiosqlite",
    "httpcore",
    "httpx",
    "python_multipart",
    "sqlalchemy.engine",
)


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Log to stdout once per process, kassa at the configured level."""
    level = getattr(logging, get_settings().log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("kassa").setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

# API version info
API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

# OpenAPI tags metadata for documentation
OPENAPI_TAGS = [
    {
        "name": "Bank Accounts",
        "description": """Bank accounts and everything imported into them.

**Accounts:**
- One account per tenant may be the default
- Balances are derived from imported transactions on every read
- Accounts with transactions cannot be deleted, only deactivated

**Statement Import:**
- CSV upload with layout detection (`GENERIC`, `SWEDBANK_EE`, `SEB_EE`, `LHV_EE`)
- Pre-parsed JSON rows
- Duplicates skipped by external id, else by date + amount + description
- Bad rows reported as `Row N: ...`, never aborting the import
""",
    },
    {
        "name": "Bank Transactions",
        "description": """Imported statement lines and payment matching.

**Statuses:**
- `UNMATCHED`: no payment linked
- `MATCHED`: linked to a payment
- `RECONCILED`: locked by a completed reconciliation

**Matching:**
- Ranked payment suggestions with a heuristic confidence (0..1)
- Manual match/unmatch, or create the payment from the transaction
""",
    },
    {
        "name": "Reconciliations",
        "description": """Statement reconciliation sessions.

**Lifecycle:**
1. Open a session with the statement's opening and closing balances
2. Tag transactions with it
3. Check the tie-out summary (advisory)
4. Complete: tagged MATCHED transactions become RECONCILED
""",
    },
    {
        "name": "Imports",
        "description": """Statement preview and validation before import.

Shows the detected layout, the column mapping and every row that would
fail, without storing anything.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Kassa API v%s", API_VERSION)
    engine = get_engine()
    await _init_database_schema(engine)
    yield

    await engine.dispose()
    logger.info("Kassa API stopped, database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints.

    Returns
    -------
    APIRouter with all v1 endpoints mounted.
    """
    v1_router = APIRouter()

    v1_router.include_router(
        bank_accounts_router,
        prefix="/bank-accounts",
        tags=["Bank Accounts"],
    )
    v1_router.include_router(
        bank_transactions_router,
        prefix="/bank-transactions",
        tags=["Bank Transactions"],
    )
    v1_router.include_router(
        reconciliations_router,
        prefix="/reconciliations",
        tags=["Reconciliations"],
    )
    v1_router.include_router(imports_router, prefix="/imports", tags=["Imports"])

    return v1_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description=(
            "**Bank statement reconciliation**: CSV import, "
            "payment matching and reconciliation sessions."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register domain exception handlers for consistent error responses
    setup_exception_handlers(app)

    # Include versioned API router
    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return HealthResponse(status="healthy", version=API_VERSION)

    # Root endpoint with API info
    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "bank_accounts": f"{API_V1_PREFIX}/bank-accounts",
                "bank_transactions": f"{API_V1_PREFIX}/bank-transactions",
                "reconciliations": f"{API_V1_PREFIX}/reconciliations",
                "imports": f"{API_V1_PREFIX}/imports",
            },
        }

    return app


# Application instance for uvicorn
app = create_app()
