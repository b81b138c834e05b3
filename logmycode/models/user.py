from sqlmodel import Field

from logmycode.models.base import CreatedAtMixin, UUIDMixin


class User(UUIDMixin, CreatedAtMixin, table=True):
    """
    A developer known to the backend.

    Identified by username only. Rows are created implicitly the first time
    commits are ingested for that username and are never deleted.
    """

    __tablename__ = "users"

    username: str = Field(
        nullable=False,
        unique=True,
        index=True,
        description="Username sent by the collector as userId",
    )
