"""Tests for the backend HTTP client using httpx.MockTransport."""

import datetime as dt
import json

import httpx
import pytest

from logmycode.collector.client import LogMyCodeClient


def _client(handler) -> LogMyCodeClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LogMyCodeClient("http://backend/api/", client=http)


@pytest.mark.asyncio
async def test_submit_commits_posts_payload():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"summary": "ok"})

    payload = {"userId": "alen", "date": "2025-12-06", "repos": []}
    async with _client(handler) as client:
        result = await client.submit_commits(payload)

    assert result == {"summary": "ok"}
    assert seen == {"method": "POST", "url": "http://backend/api/commits", "body": payload}


@pytest.mark.asyncio
async def test_get_daily_summary_sends_query_params():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/daily-summary"
        assert request.url.params["userId"] == "alen"
        assert request.url.params["date"] == "2025-12-06"
        return httpx.Response(200, json={"userId": "alen"})

    async with _client(handler) as client:
        result = await client.get_daily_summary("alen", dt.date(2025, 12, 6))

    assert result == {"userId": "alen"}


@pytest.mark.asyncio
async def test_get_recent_summaries_path():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/recent-summaries"
        return httpx.Response(200, json={"today": {}, "yesterday": {}})

    async with _client(handler) as client:
        result = await client.get_recent_summaries("alen", dt.date(2025, 12, 6))

    assert set(result) == {"today", "yesterday"}


@pytest.mark.asyncio
async def test_error_status_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Internal Server Error"})

    async with _client(handler) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await client.get_daily_summary("alen", dt.date(2025, 12, 6))


def test_client_outside_context_raises():
    with pytest.raises(RuntimeError):
        LogMyCodeClient("http://backend/api").client
