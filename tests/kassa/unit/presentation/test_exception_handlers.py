"""Tests for the centralized API exception handlers."""

from uuid import UUID

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from kassa.domain.banking.exceptions import (
    BankAccountInUseError,
    BankAccountNotFoundError,
    InvalidAmountError,
    ReconciliationAccountMismatchError,
    StatementStreamError,
)
from kassa.domain.shared.exceptions import ConflictError, ErrorCode
from kassa.presentation.api.error_sanitizer import GENERIC_ERROR_MESSAGE
from kassa.presentation.api.exception_handlers import setup_exception_handlers

SOME_ID = UUID("12345678-1234-5678-1234-567812345678")


@pytest.fixture
def client():
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise BankAccountNotFoundError(SOME_ID)

    @app.get("/in-use")
    async def in_use():
        raise BankAccountInUseError(SOME_ID, 3)

    @app.get("/mismatch")
    async def mismatch():
        raise ReconciliationAccountMismatchError(SOME_ID, SOME_ID)

    @app.get("/parse")
    async def parse():
        raise InvalidAmountError("abc", column=3)

    @app.get("/unreadable")
    async def unreadable():
        raise StatementStreamError()

    @app.get("/leaky")
    async def leaky():
        raise ConflictError("asyncpg: deadlock detected")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom at /app/src/kassa/x.py:12")

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    """Tests for domain exception to HTTP response mapping."""

    def test_not_found(self, client):
        response = client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "detail": f"Bank account not found: {SOME_ID}",
            "code": ErrorCode.BANK_ACCOUNT_NOT_FOUND.value,
        }

    def test_conflict(self, client):
        response = client.get("/in-use")

        assert response.status_code == 409
        assert response.json()["code"] == "BANK_ACCOUNT_IN_USE"

    def test_business_rule(self, client):
        response = client.get("/mismatch")

        assert response.status_code == 422
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_parse_error_names_field_and_column(self, client):
        response = client.get("/parse")

        assert response.status_code == 400
        assert response.json() == {
            "detail": "invalid amount 'abc'",
            "code": "INVALID_AMOUNT",
            "field": "amount",
            "column": 3,
        }

    def test_unreadable_statement(self, client):
        response = client.get("/unreadable")

        assert response.status_code == 400
        assert response.json()["code"] == "STATEMENT_UNREADABLE"

    def test_leaky_domain_message_is_sanitized(self, client):
        response = client.get("/leaky")

        assert response.status_code == 409
        assert response.json()["detail"] == GENERIC_ERROR_MESSAGE

    def test_unhandled_exception(self, client):
        response = client.get("/crash")

        assert response.status_code == 500
        assert response.json() == {
            "detail": GENERIC_ERROR_MESSAGE,
            "code": "INTERNAL_ERROR",
        }
