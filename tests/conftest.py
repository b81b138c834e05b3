"""Root conftest: test infrastructure for all backend tests.

Provides:
- Mocked AsyncSession (`db`) and a fake Database handle
- API client with dependency overrides
- Autouse mock for the summary generator (no Anthropic calls)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from logmycode.services.summary import SummaryOutcome, SummaryResult

GENERATED_SUMMARY = "LogMyCode – Daily Summary (2025-12-06)\n\nRepos:\n• project-x\n• Added login validation\n\nTotal commits: 1"


class FakeDatabase:
    """Stands in for logmycode.core.database.Database; hands out the mocked session."""

    def __init__(self, session: AsyncMock):
        self._session = session
        self.sessions_opened = 0

    @asynccontextmanager
    async def session(self):
        self.sessions_opened += 1
        yield self._session


@pytest.fixture
def db() -> AsyncMock:
    """Mocked AsyncSession. execute/commit/rollback/flush are awaitable."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def fake_database(db: AsyncMock) -> FakeDatabase:
    return FakeDatabase(db)


@pytest.fixture
async def api_client(db: AsyncMock, fake_database: FakeDatabase):
    """HTTP client whose database dependencies resolve to the mocked session."""
    from logmycode.core.database import get_database, get_db
    from logmycode.main import app

    app.dependency_overrides[get_database] = lambda: fake_database

    async def override_db():
        yield db

    app.dependency_overrides[get_db] = override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_summary_generator():
    """SAFETY: never call the completion service from endpoint tests."""
    with patch("logmycode.api.v1.commits.daily_summary_generator", new_callable=MagicMock) as gen:
        gen.generate = AsyncMock(
            return_value=SummaryResult(text=GENERATED_SUMMARY, outcome=SummaryOutcome.GENERATED)
        )
        yield gen
