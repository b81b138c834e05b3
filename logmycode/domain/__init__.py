from logmycode.domain.commit_operations import StoredCommit, commit_ops
from logmycode.domain.daily_summary_operations import daily_summary_ops
from logmycode.domain.repo_operations import repo_ops
from logmycode.domain.user_operations import user_ops

__all__ = [
    "StoredCommit",
    "commit_ops",
    "daily_summary_ops",
    "repo_ops",
    "user_ops",
]
