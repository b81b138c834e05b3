"""Local side of LogMyCode: find the day's commits and send them to the backend."""

from logmycode.collector.client import LogMyCodeClient
from logmycode.collector.folders import FolderStore
from logmycode.collector.git_log import (
    GitCommit,
    RepoCommits,
    collect_commits,
    get_commits_for_day,
)

__all__ = [
    "FolderStore",
    "GitCommit",
    "LogMyCodeClient",
    "RepoCommits",
    "collect_commits",
    "get_commits_for_day",
]
