"""REST API presentation layer for Kassa.

This package provides a FastAPI-based REST API for bank statement import,
payment matching and reconciliation.

Structure:
    api/
    ├── app.py              # FastAPI application factory
    ├── config.py           # API configuration
    ├── dependencies.py     # Dependency injection
    ├── error_sanitizer.py  # Outgoing error message scrubbing
    ├── routers/            # API route handlers
    └── schemas/            # Pydantic request/response schemas
"""

from kassa.presentation.api.app import create_app

__all__ = ["create_app"]
