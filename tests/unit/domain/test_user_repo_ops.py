"""Unit tests for user and repo find-or-create: all DB calls mocked."""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.dialects import postgresql

from logmycode.domain.repo_operations import RepoOperations
from logmycode.domain.user_operations import UserOperations

from tests.helpers.mock_factories import make_mock_user, mock_scalar_result


def _sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


class TestUserOperations:
    def setup_method(self):
        self.ops = UserOperations()
        self.db = AsyncMock()

    @pytest.mark.asyncio
    async def test_get_by_username_returns_user(self):
        user = make_mock_user()
        self.db.execute = AsyncMock(return_value=mock_scalar_result(user))

        assert await self.ops.get_by_username(self.db, "alen") == user

    @pytest.mark.asyncio
    async def test_get_by_username_returns_none(self):
        self.db.execute = AsyncMock(return_value=mock_scalar_result(None))

        assert await self.ops.get_by_username(self.db, "ghost") is None

    @pytest.mark.asyncio
    async def test_find_or_create_returns_id_from_upsert(self):
        user_id = uuid.uuid4()
        self.db.execute = AsyncMock(return_value=mock_scalar_result(user_id))

        result = await self.ops.find_or_create(self.db, "alen")

        assert result == user_id
        sql = _sql(self.db.execute.call_args.args[0])
        assert "ON CONFLICT (username) DO UPDATE" in sql
        assert "RETURNING users.id" in sql


class TestRepoOperations:
    def setup_method(self):
        self.ops = RepoOperations()
        self.db = AsyncMock()

    @pytest.mark.asyncio
    async def test_find_or_create_is_keyed_by_user_and_name(self):
        repo_id = uuid.uuid4()
        self.db.execute = AsyncMock(return_value=mock_scalar_result(repo_id))

        result = await self.ops.find_or_create(self.db, uuid.uuid4(), "project-x")

        assert result == repo_id
        sql = _sql(self.db.execute.call_args.args[0])
        assert "ON CONFLICT (user_id, name) DO UPDATE" in sql
        assert "RETURNING repos.id" in sql
