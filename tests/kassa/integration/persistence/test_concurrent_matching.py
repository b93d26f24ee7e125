"""Two sessions racing to match the same transaction (file SQLite)."""

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from kassa.application.commands.banking import MatchTransactionCommand
from kassa.domain.banking.exceptions import TransactionStateConflictError
from kassa.domain.banking.value_objects import TransactionStatus
from kassa.infrastructure.persistence.sqlalchemy.models.base import Base
from kassa.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)
from tests.shared.fixtures.factories import (
    make_account,
    make_payment,
    make_transaction,
)


@pytest_asyncio.fixture
async def file_session_maker(tmp_path):
    """
    Session maker on a SQLite file.

    Every session gets its own connection, so two units of work really
    compete for the database lock.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'race.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(file_session_maker, tenant):
    """An UNMATCHED transaction and two payments that could claim it."""
    account = make_account(tenant.tenant_id)
    transaction = make_transaction(tenant.tenant_id, account.id)
    first = make_payment(tenant.tenant_id)
    second = make_payment(tenant.tenant_id, payment_number="PMT-000002")

    async with file_session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session, tenant)
        await factory.bank_account_repository().save(account)
        await factory.bank_transaction_repository().add(transaction)
        for payment in (first, second):
            await factory.payment_repository().add(payment)
        await session.commit()

    return transaction, first, second


class TestConcurrentMatching:
    """Only one of two concurrent matches on a transaction can win."""

    @pytest.mark.asyncio
    async def test_second_match_gets_a_conflict(
        self,
        file_session_maker,
        seeded,
        tenant,
    ):
        transaction, first, second = seeded

        async def match(payment_id):
            async with file_session_maker() as session:
                factory = SQLAlchemyRepositoryFactory(session, tenant)
                command = MatchTransactionCommand.from_factory(factory)
                try:
                    await command.execute(transaction.id, payment_id)
                except TransactionStateConflictError:
                    await session.rollback()
                    return "conflict", payment_id
                await session.commit()
                return "ok", payment_id

        outcomes = await asyncio.gather(match(first.id), match(second.id))

        assert sorted(outcome for outcome, _ in outcomes) == ["conflict", "ok"]
        [winner] = [payment_id for outcome, payment_id in outcomes if outcome == "ok"]

        async with file_session_maker() as session:
            factory = SQLAlchemyRepositoryFactory(session, tenant)
            loaded = await factory.bank_transaction_repository().find_by_id(
                transaction.id,
            )

        assert loaded.status == TransactionStatus.MATCHED
        assert loaded.matched_payment_id == winner
