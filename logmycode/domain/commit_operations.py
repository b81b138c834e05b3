"""Domain operations for ingesting and reading a day's commits."""

import datetime as dt
import logging
import uuid as uuid_pkg
from dataclasses import dataclass

from sqlalchemy import Date, cast, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from logmycode.domain.repo_operations import repo_ops
from logmycode.domain.user_operations import user_ops
from logmycode.models.commit import Commit
from logmycode.models.repo import Repo
from logmycode.models.user import User
from logmycode.schemas.commits import BulkCommitPayload

logger = logging.getLogger(__name__)


@dataclass
class StoredCommit:
    """A persisted commit joined with the name of its repository."""

    id: uuid_pkg.UUID
    user_id: uuid_pkg.UUID
    repo_id: uuid_pkg.UUID
    repo_name: str
    hash: str
    message: str
    committed_at: dt.datetime
    inserted_at: dt.datetime


def author_local_time(timestamp: dt.datetime | None) -> dt.datetime:
    """Naive author wall-clock time; server local time when absent.

    The calendar date of the result matches the collector's local-time
    git log window for the same commit.
    """
    if timestamp is None:
        return dt.datetime.now()
    return timestamp.replace(tzinfo=None)


class CommitOperations:
    """
    Operations for commits and the user/repo rows they hang off.

    Note: This doesn't extend a generic CRUD base because every write is an
    upsert keyed by a uniqueness constraint.
    """

    async def upsert(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        repo_id: uuid_pkg.UUID,
        hash: str,
        message: str,
        committed_at: dt.datetime,
    ) -> None:
        """Insert a commit, or overwrite its message if (repo_id, hash) exists."""
        stmt = (
            insert(Commit)
            .values(
                user_id=user_id,
                repo_id=repo_id,
                hash=hash,
                message=message,
                committed_at=committed_at,
            )
            .on_conflict_do_update(
                index_elements=["repo_id", "hash"],
                set_={"message": message},
            )
        )
        await db.execute(stmt)

    async def upsert_user_repos_and_commits(
        self,
        db: AsyncSession,
        payload: BulkCommitPayload,
    ) -> int:
        """
        Store a bulk payload in a single transaction.

        Upserts the user by username, each repo by (user, name), then each
        commit by (repo, hash). Timestamps keep the author's clock time without
        the offset; commits that carry none are stamped with the ingestion
        time. The transaction is committed here; on any failure it is rolled
        back and the original error is re-raised.

        Returns:
            Number of commit rows written (inserted or updated)
        """
        written = 0
        try:
            user_id = await user_ops.find_or_create(db, payload.user_id)

            for repo in payload.repos:
                repo_id = await repo_ops.find_or_create(db, user_id, repo.name)

                for commit in repo.commits:
                    committed_at = author_local_time(commit.timestamp)
                    await self.upsert(
                        db,
                        user_id=user_id,
                        repo_id=repo_id,
                        hash=commit.hash,
                        message=commit.message,
                        committed_at=committed_at,
                    )
                    written += 1

            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            f"Stored {written} commit(s) across {len(payload.repos)} repo(s) "
            f"for {payload.user_id} on {payload.date}"
        )
        return written

    async def get_for_user_and_date(
        self,
        db: AsyncSession,
        username: str,
        day: dt.date,
    ) -> list[StoredCommit]:
        """
        Get a user's commits whose committed_at falls on the given calendar day.

        committed_at holds the author's local time, so the day is the author's
        own calendar day.

        Args:
            db: Database session
            username: Username the commits were ingested under
            day: Calendar date to match against committed_at

        Returns:
            Commits ordered by committed_at, then inserted_at
        """
        statement = (
            select(Commit, Repo.name)
            .join(Repo, Commit.repo_id == Repo.id)  # type: ignore[arg-type]
            .join(User, Commit.user_id == User.id)  # type: ignore[arg-type]
            .where(
                User.username == username,  # type: ignore[arg-type]
                cast(Commit.committed_at, Date) == day,
            )
            .order_by(Commit.committed_at, Commit.inserted_at)  # type: ignore[arg-type]
        )
        result = await db.execute(statement)

        return [
            StoredCommit(
                id=commit.id,
                user_id=commit.user_id,
                repo_id=commit.repo_id,
                repo_name=repo_name,
                hash=commit.hash,
                message=commit.message,
                committed_at=commit.committed_at,
                inserted_at=commit.inserted_at,
            )
            for commit, repo_name in result.all()
        ]


commit_ops = CommitOperations()
