"""API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from logmycode.core.database import Database, get_database, get_db

DbSession = Annotated[AsyncSession, Depends(get_db)]
DatabaseHandle = Annotated[Database, Depends(get_database)]

__all__ = [
    "DatabaseHandle",
    "DbSession",
    "get_database",
    "get_db",
]
