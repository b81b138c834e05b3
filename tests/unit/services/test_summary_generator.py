"""Tests for the daily summary generator.

The Anthropic client is replaced with a mock; no network calls are made.
"""

from unittest.mock import AsyncMock, MagicMock

import anthropic
import pytest

from logmycode.services.commits import RepoGroup
from logmycode.services.summary.generator import (
    GENERATION_FAILED_TEXT,
    NOT_CONFIGURED_TEXT,
    SERVICE_UNAVAILABLE_TEXT,
    DailyLogInput,
    DailySummaryGenerator,
    SummaryOutcome,
)

from tests.helpers.mock_factories import make_stored_commit


def _input(**overrides) -> DailyLogInput:
    data = {
        "user_id": "alen",
        "date": "2025-12-06",
        "repos": [
            RepoGroup(
                name="project-x",
                commits=[
                    make_stored_commit(message="feat: add login validation"),
                    make_stored_commit(hash="def5678", message="fix: resolve redirect issue"),
                ],
            ),
            RepoGroup(
                name="project-y",
                commits=[make_stored_commit(hash="9a0b1c2", message="chore: update deps")],
            ),
        ],
    }
    data.update(overrides)
    return DailyLogInput(**data)


def _text_response(text: str) -> MagicMock:
    block = MagicMock()
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


def _generator(response=None, side_effect=None) -> DailySummaryGenerator:
    gen = DailySummaryGenerator(api_key="test-key")
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=response, side_effect=side_effect)
    gen._client = client
    return gen


class TestFormatInput:
    def test_lists_commits_under_their_repo(self):
        prompt = DailySummaryGenerator(api_key="k").format_input(_input())

        assert 'User "alen" on Date "2025-12-06"' in prompt
        assert (
            "Repo: project-x\n- feat: add login validation\n- fix: resolve redirect issue"
            in prompt
        )
        assert "Repo: project-y\n- chore: update deps" in prompt

    def test_default_format_when_no_template(self):
        prompt = DailySummaryGenerator(api_key="k").format_input(_input())

        assert "LogMyCode – Daily Summary (2025-12-06)" in prompt
        assert "Total commits: [Total Count]" in prompt

    def test_template_replaces_default_format(self):
        template = "## {date}\n- bullet per repo"
        prompt = DailySummaryGenerator(api_key="k").format_input(_input(template=template))

        assert template in prompt
        assert "LogMyCode – Daily Summary (2025-12-06)" not in prompt

    def test_manual_log_is_included(self):
        prompt = DailySummaryGenerator(api_key="k").format_input(
            _input(manual_log="Paired with Sam on the billing bug")
        )

        assert "Manual Activity Log:\nPaired with Sam on the billing bug" in prompt

    def test_manual_log_absent_reads_none(self):
        prompt = DailySummaryGenerator(api_key="k").format_input(_input(manual_log="   "))

        assert "Manual Activity Log:\nNone" in prompt

    def test_instructions_name_preferred_verbs(self):
        prompt = DailySummaryGenerator(api_key="k").format_input(_input())

        assert "Added, Updated, Fixed, Refactored, Optimized" in prompt
        assert "Describe ACTIONS, not impact" in prompt


class TestGenerate:
    @pytest.mark.asyncio
    async def test_success_returns_completion_text(self):
        gen = _generator(response=_text_response("LogMyCode – Daily Summary (2025-12-06)"))

        result = await gen.generate(_input())

        assert result.outcome is SummaryOutcome.GENERATED
        assert result.ok
        assert result.text == "LogMyCode – Daily Summary (2025-12-06)"

    @pytest.mark.asyncio
    async def test_single_call_with_configured_parameters(self):
        gen = _generator(response=_text_response("summary"))

        await gen.generate(_input())

        gen._client.messages.create.assert_awaited_once()
        kwargs = gen._client.messages.create.call_args.kwargs
        assert kwargs["model"] == gen.model
        assert kwargs["temperature"] == gen.temperature
        assert kwargs["max_tokens"] == gen.max_tokens
        assert kwargs["system"] == "You are a helpful assistant that summarizes code changes."
        assert kwargs["messages"][0]["role"] == "user"
        assert kwargs["messages"][0]["content"] == gen.format_input(_input())

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_the_call(self):
        gen = DailySummaryGenerator(api_key="")
        gen._client = MagicMock()
        gen._client.messages.create = AsyncMock()

        result = await gen.generate(_input())

        assert result.outcome is SummaryOutcome.NOT_CONFIGURED
        assert result.text == NOT_CONFIGURED_TEXT
        assert not result.ok
        gen._client.messages.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_service_error_becomes_fallback_text(self):
        gen = _generator(side_effect=RuntimeError("upstream timeout"))

        result = await gen.generate(_input())

        assert result.outcome is SummaryOutcome.SERVICE_UNAVAILABLE
        assert result.text == SERVICE_UNAVAILABLE_TEXT

    @pytest.mark.asyncio
    async def test_empty_completion_becomes_fallback_text(self):
        gen = _generator(response=_text_response("   "))

        result = await gen.generate(_input())

        assert result.outcome is SummaryOutcome.GENERATION_FAILED
        assert result.text == GENERATION_FAILED_TEXT

    @pytest.mark.asyncio
    async def test_no_content_blocks_becomes_fallback_text(self):
        response = MagicMock()
        response.content = []
        gen = _generator(response=response)

        result = await gen.generate(_input())

        assert result.outcome is SummaryOutcome.GENERATION_FAILED


class TestClient:
    def test_client_is_created_once_with_the_api_key(self):
        gen = DailySummaryGenerator(api_key="test-key")

        client = gen.client

        assert isinstance(client, anthropic.AsyncAnthropic)
        assert client.api_key == "test-key"
        assert gen.client is client
