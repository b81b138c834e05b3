from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from logmycode.models.base import CreatedAtMixin, UserOwnedMixin, UUIDMixin


class Repo(UUIDMixin, UserOwnedMixin, CreatedAtMixin, table=True):
    """A repository folder name, unique per user."""

    __tablename__ = "repos"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_repos_user_name"),)

    name: str = Field(nullable=False, description="Folder basename of the repository")
