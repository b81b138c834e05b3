"""Domain operations for daily work summaries."""

import datetime as dt

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from logmycode.core.exceptions import UserNotFoundError
from logmycode.domain.user_operations import user_ops
from logmycode.models.daily_summary import DailySummary
from logmycode.models.user import User


class DailySummaryOperations:
    """
    Operations for per-user, per-day summaries.

    Summaries are looked up by username rather than user id, and writing a
    summary never creates a user: the user must already exist from a prior
    commit ingestion.
    """

    def __init__(self) -> None:
        self.model = DailySummary

    async def get(
        self,
        db: AsyncSession,
        username: str,
        day: dt.date,
    ) -> DailySummary | None:
        """Get the summary stored for a user and date, or None."""
        statement = (
            select(DailySummary)
            .join(User, DailySummary.user_id == User.id)  # type: ignore[arg-type]
            .where(
                User.username == username,  # type: ignore[arg-type]
                DailySummary.date == day,  # type: ignore[arg-type]
            )
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_latest_before(
        self,
        db: AsyncSession,
        username: str,
        day: dt.date,
    ) -> DailySummary | None:
        """Get the user's most recent summary dated strictly before `day`, or None."""
        statement = (
            select(DailySummary)
            .join(User, DailySummary.user_id == User.id)  # type: ignore[arg-type]
            .where(
                User.username == username,  # type: ignore[arg-type]
                DailySummary.date < day,  # type: ignore[arg-type,operator]
            )
            .order_by(DailySummary.date.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        db: AsyncSession,
        username: str,
        day: dt.date,
        summary: str,
        total_commits: int,
    ) -> DailySummary:
        """
        Create or replace the summary for a user and date.

        Uses PostgreSQL's INSERT ... ON CONFLICT DO UPDATE for atomicity.
        created_at is refreshed on every write.

        Raises:
            UserNotFoundError: If no user row exists for the username
        """
        user = await user_ops.get_by_username(db, username)
        if user is None:
            raise UserNotFoundError(username)

        now = dt.datetime.now(dt.UTC)
        stmt = (
            insert(self.model)
            .values(
                user_id=user.id,
                date=day,
                summary=summary,
                total_commits=total_commits,
                created_at=now,
            )
            .on_conflict_do_update(
                index_elements=["user_id", "date"],
                set_={
                    "summary": summary,
                    "total_commits": total_commits,
                    "created_at": now,
                },
            )
            .returning(DailySummary)
        )

        result = await db.execute(stmt)
        await db.flush()

        return result.scalar_one()


daily_summary_ops = DailySummaryOperations()
