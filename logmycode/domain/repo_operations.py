import uuid as uuid_pkg

from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from logmycode.models.repo import Repo


class RepoOperations:
    """Operations for Repo model."""

    async def find_or_create(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        name: str,
    ) -> uuid_pkg.UUID:
        """Return the id of the user's repo with this name, creating it if needed."""
        stmt = (
            insert(Repo)
            .values(user_id=user_id, name=name)
            .on_conflict_do_update(
                index_elements=["user_id", "name"],
                set_={"name": name},
            )
            .returning(Repo.id)
        )
        result = await db.execute(stmt)
        return result.scalar_one()


repo_ops = RepoOperations()
