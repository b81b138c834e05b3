"""
Commit extraction from local git repositories.

Lists the commits an author made on one calendar day by running `git log`
in each folder and parsing a `|`-delimited one-line-per-commit format.

Extraction is best-effort per folder: if git fails for a folder (not a
repository, git missing, permission denied) that folder yields no commits
and the failure is logged, while the remaining folders are still scanned.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
import subprocess
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
# hash | subject | strict ISO-8601 author date
LOG_FORMAT = FIELD_SEPARATOR.join(("%H", "%s", "%aI"))

# Characters with meaning in POSIX extended regular expressions
_ERE_SPECIAL = re.compile(r"([\\.^$|?*+()\[\]{}])")
_HASH = re.compile(r"^[0-9a-f]{7,64}$")


@dataclass
class GitCommit:
    """One commit as reported by git log."""

    hash: str
    message: str
    timestamp: str


@dataclass
class RepoCommits:
    """All of a day's commits found in one folder."""

    name: str
    commits: list[GitCommit] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def escape_author(author: str) -> str:
    """Escape an author filter so git matches it literally.

    git treats --author as a regular expression; used with
    --extended-regexp, a backslash before every special character makes the
    whole string a literal.
    """
    return _ERE_SPECIAL.sub(r"\\\1", author)


def build_log_command(day: dt.date, author: str) -> list[str]:
    """Build the git log argument list for one local-time day window."""
    day_str = day.isoformat()
    return [
        "git",
        "log",
        "--no-merges",
        "--all",
        "--extended-regexp",
        f"--author={escape_author(author)}",
        f"--since={day_str} 00:00:00",
        f"--until={day_str} 23:59:59",
        f"--pretty=format:{LOG_FORMAT}",
    ]


def parse_log_line(line: str) -> GitCommit | None:
    """Parse one `hash|subject|timestamp` line, or return None if malformed.

    A subject that itself contains the separator produces more than three
    fields; such lines are rejected rather than guessed at.
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != 3:
        return None

    commit_hash, message, timestamp = (f.strip() for f in fields)
    if not _HASH.match(commit_hash):
        return None
    try:
        dt.datetime.fromisoformat(timestamp)
    except ValueError:
        return None

    return GitCommit(hash=commit_hash, message=message, timestamp=timestamp)


def parse_log_output(output: str) -> list[GitCommit]:
    """Parse git log output, skipping (and logging) lines that do not parse."""
    commits: list[GitCommit] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        commit = parse_log_line(line)
        if commit is None:
            logger.warning(f"Skipping malformed git log line: {line!r}")
            continue
        commits.append(commit)
    return commits


def repo_name(folder: str | Path) -> str:
    return Path(folder).expanduser().resolve().name


def get_commits_for_day(folder: str | Path, day: dt.date, author: str) -> RepoCommits:
    """List the author's non-merge commits on `day` across all refs of one folder.

    Returns:
        RepoCommits named after the folder; empty if git failed.
    """
    name = repo_name(folder)
    cmd = build_log_command(day, author)

    try:
        result = subprocess.run(
            cmd,
            cwd=Path(folder).expanduser(),
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Error fetching commits for {folder}: {e.stderr.strip() or e}")
        return RepoCommits(name=name)
    except OSError as e:
        logger.error(f"Error fetching commits for {folder}: {e}")
        return RepoCommits(name=name)

    return RepoCommits(name=name, commits=parse_log_output(result.stdout))


def collect_commits(folders: Iterable[str | Path], day: dt.date, author: str) -> list[RepoCommits]:
    """Scan folders in order and keep only those with at least one commit."""
    results: list[RepoCommits] = []
    for folder in folders:
        logger.info(f"Scanning {folder}...")
        repo = get_commits_for_day(folder, day, author)
        if repo.commits:
            results.append(repo)
    return results


def get_git_user_name() -> str | None:
    """Return the globally configured `git config user.name`, if any."""
    try:
        result = subprocess.run(
            ["git", "config", "--get", "user.name"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return result.stdout.strip() or None
