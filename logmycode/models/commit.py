import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import DateTime, UniqueConstraint, text
from sqlmodel import Field

from logmycode.models.base import UserOwnedMixin, UUIDMixin


class Commit(UUIDMixin, UserOwnedMixin, table=True):
    """
    A single git commit, unique per repository by hash.

    user_id is denormalized from the owning repo so a day's commits can be
    read without walking through repos. Re-ingesting the same (repo, hash)
    overwrites the message in place.
    """

    __tablename__ = "commits"
    __table_args__ = (UniqueConstraint("repo_id", "hash", name="uq_commits_repo_hash"),)

    repo_id: uuid_pkg.UUID = Field(
        foreign_key="repos.id",
        nullable=False,
        index=True,
    )
    hash: str = Field(nullable=False, description="Full git object id")
    message: str = Field(nullable=False, description="Commit subject line")

    # Author wall-clock time with the UTC offset dropped
    committed_at: datetime = Field(  # type: ignore[call-overload]
        nullable=False,
        sa_type=DateTime(timezone=False),
        index=True,
        description="Author local time; server local time when the collector omits it",
    )
    inserted_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": text("now()")},
    )
