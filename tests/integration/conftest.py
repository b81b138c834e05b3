"""Integration test conftest: real PostgreSQL, transaction-rollback sessions.

Runs only when LOGMYCODE_TEST_DATABASE_URL points at a disposable database
(postgresql+asyncpg://...). Tables are created if missing; every test runs
inside an outer transaction that is rolled back, so nothing persists.
"""

import os

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel import SQLModel

import logmycode.models  # noqa: F401

TEST_DATABASE_URL = os.environ.get("LOGMYCODE_TEST_DATABASE_URL")


@pytest.fixture(autouse=True)
def _mark_integration(request):
    """Auto-mark all tests in this directory as integration."""
    request.node.add_marker(pytest.mark.integration)
    if not TEST_DATABASE_URL:
        pytest.skip("LOGMYCODE_TEST_DATABASE_URL not set")


@pytest.fixture
async def db_session():
    """Session bound to a connection whose transaction is ALWAYS rolled back.

    Application code may call commit()/rollback() freely: with
    join_transaction_mode="create_savepoint" those act on a SAVEPOINT.
    The session runs in UTC, which differs from the authors' offsets used in
    the tests.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"server_settings": {"timezone": "UTC"}},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with engine.connect() as conn:
        trans = await conn.begin()
        session = AsyncSession(
            bind=conn,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()

    await engine.dispose()
