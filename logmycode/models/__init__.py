from logmycode.models.commit import Commit
from logmycode.models.daily_summary import DailySummary
from logmycode.models.repo import Repo
from logmycode.models.user import User

__all__ = [
    "Commit",
    "DailySummary",
    "Repo",
    "User",
]
