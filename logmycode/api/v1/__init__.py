from logmycode.api.v1 import commits, summaries

__all__ = [
    "commits",
    "summaries",
]
