import uuid as uuid_pkg

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from logmycode.models.user import User


class UserOperations:
    """Operations for User model."""

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> User | None:
        """Get a user by username."""
        statement = select(User).where(User.username == username)  # type: ignore[arg-type]
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def find_or_create(
        self,
        db: AsyncSession,
        username: str,
    ) -> uuid_pkg.UUID:
        """
        Return the id of the user with this username, creating the row if needed.

        Uses INSERT ... ON CONFLICT (username) DO UPDATE so that RETURNING
        yields the existing id when the user is already known.
        """
        stmt = (
            insert(User)
            .values(username=username)
            .on_conflict_do_update(
                index_elements=["username"],
                set_={"username": username},
            )
            .returning(User.id)
        )
        result = await db.execute(stmt)
        return result.scalar_one()


user_ops = UserOperations()
