"""Daily summary model for AI-generated work logs."""

import datetime as dt

from sqlalchemy import Date, Text, UniqueConstraint
from sqlmodel import Field

from logmycode.models.base import CreatedAtMixin, UserOwnedMixin, UUIDMixin


class DailySummary(UUIDMixin, UserOwnedMixin, CreatedAtMixin, table=True):
    """
    One generated (or edited) work summary per user and calendar day.

    Regenerating a day overwrites the row and refreshes created_at; there is
    no version history.
    """

    __tablename__ = "daily_summaries"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_daily_summaries_user_date"),)

    date: dt.date = Field(sa_type=Date, nullable=False)  # type: ignore[call-overload]
    summary: str = Field(sa_type=Text, nullable=False)  # type: ignore[call-overload]

    # Day's commit count at time of generation
    total_commits: int = Field(default=0, nullable=False)
