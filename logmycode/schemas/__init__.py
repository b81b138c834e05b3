"""Pydantic schemas for API request/response validation."""

from logmycode.schemas.commits import BulkCommitPayload, CommitIn, RepoCommitsIn

__all__ = [
    "BulkCommitPayload",
    "CommitIn",
    "RepoCommitsIn",
]
