"""Group commits by repository and drop duplicate hashes.

Shared by the ingestion endpoint (to normalize the incoming payload before it
is stored) and by every response that lists a day's commits.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar

from logmycode.schemas.commits import BulkCommitPayload, CommitIn, RepoCommitsIn


class HasHash(Protocol):
    hash: str
    message: str


T = TypeVar("T", bound=HasHash)


@dataclass
class RepoGroup(Generic[T]):
    """Commits of one repository, unique by hash, in first-seen order."""

    name: str
    commits: list[T] = field(default_factory=list)


def group_unique_commits(pairs: Iterable[tuple[str, T]]) -> list[RepoGroup[T]]:
    """Group (repo_name, commit) pairs by repository.

    Repositories keep the order in which they were first seen. Within a
    repository the first commit with a given hash wins and later duplicates
    are dropped.
    """
    groups: dict[str, RepoGroup[T]] = {}
    seen: dict[str, set[str]] = {}

    for repo_name, commit in pairs:
        group = groups.get(repo_name)
        if group is None:
            group = groups[repo_name] = RepoGroup(name=repo_name)
            seen[repo_name] = set()

        if commit.hash in seen[repo_name]:
            continue
        seen[repo_name].add(commit.hash)
        group.commits.append(commit)

    return list(groups.values())


def dedupe_payload(payload: BulkCommitPayload) -> BulkCommitPayload:
    """Return a copy of the payload with repos merged by name and hashes unique."""
    pairs = ((repo.name, commit) for repo in payload.repos for commit in repo.commits)
    groups: list[RepoGroup[CommitIn]] = group_unique_commits(pairs)
    repos = [RepoCommitsIn(name=g.name, commits=g.commits) for g in groups]
    return payload.model_copy(update={"repos": repos})


def groups_to_wire(groups: list[RepoGroup[Any]]) -> list[dict[str, Any]]:
    """Shape groups as the JSON `repos` list: [{name, commits: [{hash, message}]}]."""
    return [
        {
            "name": group.name,
            "commits": [{"hash": c.hash, "message": c.message} for c in group.commits],
        }
        for group in groups
    ]
