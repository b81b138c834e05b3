"""Summary history endpoints: one stored day, and today vs. the latest prior day."""

import asyncio
import datetime as dt
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Query

from logmycode.api.deps import DatabaseHandle, DbSession
from logmycode.core.database import Database
from logmycode.core.exceptions import BadRequestError, InternalServerError
from logmycode.domain import commit_ops, daily_summary_ops
from logmycode.models.daily_summary import DailySummary
from logmycode.services.commits import group_unique_commits, groups_to_wire

logger = logging.getLogger(__name__)

router = APIRouter(tags=["summaries"])

NO_SUMMARY_TEXT = "No summary generated yet."
NO_DATE_TEXT = "N/A"


@router.get("/daily-summary")
async def get_daily_summary(
    db: DbSession,
    user_id: str | None = Query(None, alias="userId"),
    date: dt.date | None = Query(None, description="Calendar day, YYYY-MM-DD"),
) -> dict[str, Any]:
    """Get the stored summary and commits for one day.

    Does NOT generate anything - use POST /commits for that. When no summary
    row exists the summary is a fixed placeholder.
    """
    if not user_id or date is None:
        raise BadRequestError("Missing userId or date")

    try:
        stored = await daily_summary_ops.get(db, user_id, date)
        day_commits = await commit_ops.get_for_user_and_date(db, user_id, date)
    except Exception as e:
        logger.exception(f"Error fetching summary for {user_id} on {date}")
        raise InternalServerError() from e

    groups = group_unique_commits((c.repo_name, c) for c in day_commits)

    return {
        "userId": user_id,
        "date": date.isoformat(),
        "summary": stored.summary if stored and stored.summary else NO_SUMMARY_TEXT,
        "repos": groups_to_wire(groups),
    }


async def _in_session(
    database: Database,
    query: Callable[..., Awaitable[DailySummary | None]],
    *args: Any,
) -> DailySummary | None:
    """Run one read on its own session so reads can proceed concurrently."""
    async with database.session() as session:
        return await query(session, *args)


def _summary_view(summary: DailySummary | None, date: str) -> dict[str, Any]:
    return {
        "date": date,
        "summary": (summary.summary or None) if summary else None,
        "totalCommits": summary.total_commits if summary else 0,
    }


@router.get("/recent-summaries")
async def get_recent_summaries(
    database: DatabaseHandle,
    user_id: str | None = Query(None, alias="userId"),
    date: dt.date | None = Query(None, description="Today's date; server's local date if omitted"),
) -> dict[str, Any]:
    """Get the summary for `date` and the most recent summary before it.

    Both reads are issued concurrently, each on its own session.
    """
    if not user_id:
        raise BadRequestError("Missing userId")
    today = date or dt.date.today()

    try:
        today_summary, last_summary = await asyncio.gather(
            _in_session(database, daily_summary_ops.get, user_id, today),
            _in_session(database, daily_summary_ops.get_latest_before, user_id, today),
        )
    except Exception as e:
        logger.exception(f"Error fetching recent summaries for {user_id}")
        raise InternalServerError() from e

    return {
        "userId": user_id,
        "today": _summary_view(today_summary, today.isoformat()),
        "yesterday": _summary_view(
            last_summary,
            last_summary.date.isoformat() if last_summary else NO_DATE_TEXT,
        ),
    }
