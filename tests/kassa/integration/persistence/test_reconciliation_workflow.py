"""End-to-end banking workflows through commands and SQLite repositories."""

import io
from datetime import date
from decimal import Decimal

import pytest

from kassa.application.commands.banking import (
    AddTransactionToReconciliationCommand,
    AutoMatchTransactionsCommand,
    CompleteReconciliationCommand,
    CreatePaymentFromTransactionCommand,
    DeleteBankAccountCommand,
    ImportStatementCommand,
    MatchTransactionCommand,
    OpenReconciliationCommand,
)
from kassa.application.queries.banking import (
    ImportHistoryQuery,
    ReconciliationSummaryQuery,
    SuggestMatchesQuery,
)
from kassa.domain.banking.exceptions import (
    BankAccountInUseError,
    TransactionStateConflictError,
)
from kassa.domain.banking.repositories import TransactionFilter
from kassa.domain.banking.value_objects import (
    ReconciliationStatus,
    TransactionStatus,
)
from tests.shared.fixtures.factories import make_account, make_payment

STATEMENT = (
    "Kuupäev,Väärtuspäev,Valuuta,Summa,Tüüp,Viitenumber,Selgitus,"
    "Saaja/maksja nimi,Konto\n"
    '14.03.2025,14.03.2025,EUR,"1 250,00",K,RF18,Invoice PMT-000001,Acme OÜ,EE12\n'
    "15.03.2025,15.03.2025,EUR,\"-45,10\",D,,Office supplies,Paper Co,EE34\n"
    "16.03.2025,16.03.2025,EUR,kaks,D,,Broken row,,\n"
)


@pytest.fixture
async def account(factory, tenant):
    account = make_account(tenant.tenant_id)
    await factory.bank_account_repository().save(account)
    return account


async def _import(factory, account, **kwargs):
    command = ImportStatementCommand.from_factory(factory)
    return await command.execute(
        account.id,
        io.StringIO(STATEMENT),
        file_name="march.csv",
        **kwargs,
    )


async def _transactions(factory, account):
    return await factory.bank_transaction_repository().find_all(
        TransactionFilter(bank_account_id=account.id),
    )


class TestStatementImport:
    """Importing the same export twice."""

    @pytest.mark.asyncio
    async def test_reimport_is_idempotent(self, factory, account):
        first = await _import(factory, account)
        second = await _import(factory, account)

        assert first.transactions_imported == 2
        assert first.errors == ["Row 4: invalid amount 'kaks'"]
        assert second.transactions_imported == 0
        assert second.duplicates_skipped == 2
        assert len(await _transactions(factory, account)) == 2

        history = await ImportHistoryQuery.from_factory(factory).execute(account.id)
        assert len(history) == 2

    @pytest.mark.asyncio
    async def test_amounts_are_parsed_with_locale(self, factory, account):
        await _import(factory, account)

        amounts = sorted(t.amount for t in await _transactions(factory, account))

        assert amounts == [Decimal("-45.10"), Decimal("1250.00")]

    @pytest.mark.asyncio
    async def test_account_with_transactions_cannot_be_deleted(
        self,
        factory,
        account,
    ):
        await _import(factory, account)

        with pytest.raises(BankAccountInUseError):
            await DeleteBankAccountCommand.from_factory(factory).execute(account.id)


class TestMatching:
    """Suggestions, manual and automatic matching."""

    @pytest.mark.asyncio
    async def test_import_with_auto_match(self, factory, account, tenant):
        payment = make_payment(
            tenant.tenant_id,
            amount=Decimal("1250.00"),
            contact_name="Acme",
        )
        await factory.payment_repository().add(payment)

        result = await _import(factory, account, auto_match=True)

        assert result.transactions_matched == 1
        matched = [
            t
            for t in await _transactions(factory, account)
            if t.status == TransactionStatus.MATCHED
        ]
        assert [t.matched_payment_id for t in matched] == [payment.id]
        [record] = await factory.statement_import_repository().find_by_account(
            account.id,
        )
        assert record.transactions_matched == 1

    @pytest.mark.asyncio
    async def test_standalone_auto_match_credits_latest_import(
        self,
        factory,
        account,
        tenant,
    ):
        await _import(factory, account)
        await factory.payment_repository().add(
            make_payment(tenant.tenant_id, amount=Decimal("1250.00")),
        )

        matched = await AutoMatchTransactionsCommand.from_factory(factory).execute(
            account.id,
        )

        assert matched == 1
        [record] = await factory.statement_import_repository().find_by_account(
            account.id,
        )
        assert record.transactions_matched == 1

    @pytest.mark.asyncio
    async def test_suggest_then_match(self, factory, account, tenant):
        await _import(factory, account)
        payment = make_payment(tenant.tenant_id, amount=Decimal("1250.00"))
        await factory.payment_repository().add(payment)
        inflow = next(
            t for t in await _transactions(factory, account) if t.amount > 0
        )

        [suggestion] = await SuggestMatchesQuery.from_factory(factory).execute(
            inflow.id,
        )
        assert suggestion.payment_id == payment.id
        assert "payment number in description" in suggestion.match_reason

        command = MatchTransactionCommand.from_factory(factory)
        await command.execute(inflow.id, payment.id)

        with pytest.raises(TransactionStateConflictError):
            await command.execute(inflow.id, payment.id)
        assert await SuggestMatchesQuery.from_factory(factory).execute(inflow.id) == []

    @pytest.mark.asyncio
    async def test_create_payment_from_outflow(self, factory, account):
        await _import(factory, account)
        outflow = next(
            t for t in await _transactions(factory, account) if t.amount < 0
        )

        result = await CreatePaymentFromTransactionCommand.from_factory(
            factory,
        ).execute(outflow.id)

        assert result.payment.payment_number == "PAY-000001"
        stored = await factory.payment_repository().find_by_id(result.payment.id)
        assert stored.amount == Decimal("45.10")
        reloaded = await factory.bank_transaction_repository().find_by_id(outflow.id)
        assert reloaded.matched_payment_id == result.payment.id


class TestReconciliation:
    """A full reconciliation session."""

    @pytest.mark.asyncio
    async def test_complete_session(self, factory, account, tenant):
        await _import(factory, account)
        transactions = await _transactions(factory, account)
        for transaction in transactions:
            await CreatePaymentFromTransactionCommand.from_factory(factory).execute(
                transaction.id,
            )

        reconciliation = await OpenReconciliationCommand.from_factory(
            factory,
        ).execute(
            account.id,
            statement_date=date(2025, 3, 31),
            opening_balance=Decimal("100.00"),
            closing_balance=Decimal("1304.90"),
        )
        tag = AddTransactionToReconciliationCommand.from_factory(factory)
        for transaction in transactions:
            await tag.execute(transaction.id, reconciliation.id)

        summary = await ReconciliationSummaryQuery.from_factory(factory).execute(
            reconciliation.id,
        )
        assert summary.matched_total == Decimal("1204.90")
        assert summary.is_balanced

        completed = await CompleteReconciliationCommand.from_factory(
            factory,
        ).execute(reconciliation.id)

        assert completed.status == ReconciliationStatus.COMPLETED
        assert completed.reconciled_balance == Decimal("1304.90")
        assert completed.completed_by == tenant.user_id
        statuses = {t.status for t in await _transactions(factory, account)}
        assert statuses == {TransactionStatus.RECONCILED}
