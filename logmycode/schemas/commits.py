"""Pydantic schemas for the commit ingestion endpoint.

Wire fields are camelCase (userId, manualLog) to match the collector's JSON;
Python attributes stay snake_case.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class CommitIn(BaseModel):
    """A single commit as extracted from git log."""

    hash: str
    message: str
    timestamp: dt.datetime | None = None  # ISO-8601 author time; ingestion time if absent


class RepoCommitsIn(BaseModel):
    """All commits found in one repository folder."""

    name: str  # Folder basename (e.g., "project-x")
    commits: list[CommitIn]


class BulkCommitPayload(BaseModel):
    """Request body for POST /api/commits."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    date: dt.date
    repos: list[RepoCommitsIn]
    template: str | None = None  # Custom output-format instructions
    manual_log: str | None = Field(default=None, alias="manualLog")  # Free-text notes
