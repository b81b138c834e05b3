"""
HTTP client for the LogMyCode backend.

Thin async wrapper over httpx; every call raises httpx.HTTPStatusError on
non-2xx responses so the CLI can report the failure.
"""

import datetime as dt
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class LogMyCodeClient:
    """Calls the /api endpoints of a running backend."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client

    async def __aenter__(self) -> "LogMyCodeClient":
        if self._client is None:
            # Summary generation waits on the LLM, so allow a long read
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(120.0, connect=5.0))
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("LogMyCodeClient must be used as an async context manager")
        return self._client

    async def submit_commits(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a day's commits; returns {userId, date, summary, summaryStatus, repos}."""
        response = await self.client.post(f"{self.base_url}/commits", json=payload)
        response.raise_for_status()
        return response.json()

    async def get_daily_summary(self, user_id: str, day: dt.date) -> dict[str, Any]:
        response = await self.client.get(
            f"{self.base_url}/daily-summary",
            params={"userId": user_id, "date": day.isoformat()},
        )
        response.raise_for_status()
        return response.json()

    async def get_recent_summaries(self, user_id: str, day: dt.date) -> dict[str, Any]:
        response = await self.client.get(
            f"{self.base_url}/recent-summaries",
            params={"userId": user_id, "date": day.isoformat()},
        )
        response.raise_for_status()
        return response.json()
