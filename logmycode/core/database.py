from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel


class Database:
    """Database handle: one engine plus the session factory bound to it.

    Constructed by the process entry point (the FastAPI lifespan or the CLI)
    and handed to request handlers through dependencies. Each operation
    acquires its own session and releases it when done.
    """

    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            future=True,
            pool_pre_ping=True,  # Detects stale connections before use
            **engine_kwargs,
        )
        self.session_maker = sessionmaker(  # type: ignore[call-overload]
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables (for development only - use Alembic in production)."""
        # Registers every table model with SQLModel.metadata
        import logmycode.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database(url: str) -> Database:
    """Build the application's database handle.

    Pool sizing: pool_size=10 base + max_overflow=20 = 30 max connections.
    """
    return Database(
        url,
        pool_size=10,
        max_overflow=20,
        pool_recycle=300,
        pool_timeout=30,
        connect_args={"command_timeout": 60},
    )


def get_database(request: Request) -> Database:
    """Dependency that returns the handle created in the app lifespan."""
    return request.app.state.database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an async database session.

    Commits when the request handler returns, rolls back and re-raises when
    it raises.
    """
    async with database.session() as session:
        yield session
