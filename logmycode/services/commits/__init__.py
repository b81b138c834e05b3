"""Commit normalization helpers."""

from logmycode.services.commits.grouping import (
    RepoGroup,
    dedupe_payload,
    group_unique_commits,
    groups_to_wire,
)

__all__ = [
    "RepoGroup",
    "dedupe_payload",
    "group_unique_commits",
    "groups_to_wire",
]
