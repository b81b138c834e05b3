"""
Command-line entry point.

Runs the backend (`serve`, `init-db`) and the local collector that scans
folders for a day's commits and submits them (`folders`, `log`, `push`,
`show`, `history`).
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, NoReturn

import httpx

from logmycode.collector.client import LogMyCodeClient
from logmycode.collector.folders import FolderStore
from logmycode.collector.git_log import collect_commits, get_git_user_name
from logmycode.config import settings
from logmycode.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _die(msg: str) -> NoReturn:
    print(msg)
    sys.exit(1)


def _call_api(fn: Callable[[LogMyCodeClient], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
    """Run one backend call; report HTTP and connection failures and exit 1."""

    async def run() -> dict[str, Any]:
        async with LogMyCodeClient(settings.api_url) as client:
            return await fn(client)

    try:
        return asyncio.run(run())
    except httpx.HTTPStatusError as e:
        logger.error(f"Backend returned {e.response.status_code}: {e.response.text}")
    except httpx.RequestError as e:
        logger.error(f"Failed to connect to API at {settings.api_url}: {e}")
    sys.exit(1)


def _print_day(result: dict[str, Any]) -> None:
    print(result.get("summary", ""))
    for repo in result.get("repos", []):
        print(f"\n{repo['name']}")
        for commit in repo["commits"]:
            print(f"  {commit['hash'][:7]}  {commit['message']}")


def _print_history(result: dict[str, Any]) -> None:
    for label in ("today", "yesterday"):
        entry = result[label]
        print(f"== {label.title()} ({entry['date']}): {entry['totalCommits']} commit(s)")
        print(entry["summary"] or "No summary.")
        print()


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run("logmycode.main:app", host=args.host, port=args.port)


def cmd_init_db(args: argparse.Namespace) -> None:
    from logmycode.core.database import Database

    async def run() -> None:
        database = Database(settings.database_url_direct)
        try:
            await database.create_all()
        finally:
            await database.dispose()

    asyncio.run(run())
    print("Database initialized.")


def cmd_folders(args: argparse.Namespace) -> None:
    store = FolderStore(settings.folders_file)
    if args.action == "add":
        if not args.paths:
            _die("Give at least one folder to add.")
        folders = store.add(*args.paths)
    elif args.action == "clear":
        store.clear()
        folders = []
    else:
        folders = store.load()

    if not folders:
        print("No folders selected.")
    for folder in folders:
        print(folder)


def build_payload(args: argparse.Namespace) -> dict[str, Any] | None:
    """Scan the folders and build the POST /commits body, or None if no commits."""
    day: dt.date = args.date or dt.date.today()
    author = args.author or get_git_user_name()
    if not author:
        _die("No author given and `git config user.name` is not set.")

    folders = args.folder or FolderStore(settings.folders_file).load()
    if not folders:
        _die("No folders selected. Run `logmycode folders add PATH` first.")

    repos = collect_commits(folders, day, author)
    if not repos:
        return None

    payload: dict[str, Any] = {
        "userId": args.user,
        "date": day.isoformat(),
        "repos": [repo.to_dict() for repo in repos],
    }
    if args.template:
        try:
            payload["template"] = Path(args.template).read_text(encoding="utf-8")
        except OSError as e:
            _die(f"Cannot read template {args.template}: {e}")
    if args.notes:
        payload["manualLog"] = args.notes
    return payload


def cmd_log(args: argparse.Namespace) -> None:
    payload = build_payload(args)
    if payload is None:
        print(f"No commits found for {(args.date or dt.date.today()).isoformat()}.")
        return

    if args.save:
        # Edit messages in the saved file, then resubmit with `logmycode push`
        Path(args.save).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Payload written to {args.save}")

    _print_day(_call_api(lambda client: client.submit_commits(payload)))


def cmd_push(args: argparse.Namespace) -> None:
    try:
        payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except OSError as e:
        _die(f"Cannot read payload {args.file}: {e}")
    except json.JSONDecodeError as e:
        _die(f"Payload {args.file} is not valid JSON: {e}")
    _print_day(_call_api(lambda client: client.submit_commits(payload)))


def cmd_show(args: argparse.Namespace) -> None:
    day = args.date or dt.date.today()
    _print_day(_call_api(lambda client: client.get_daily_summary(args.user, day)))


def cmd_history(args: argparse.Namespace) -> None:
    day = args.date or dt.date.today()
    _print_history(_call_api(lambda client: client.get_recent_summaries(args.user, day)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logmycode")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the backend API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=settings.port)
    serve.set_defaults(func=cmd_serve)

    init_db = sub.add_parser("init-db", help="Create tables (development only)")
    init_db.set_defaults(func=cmd_init_db)

    folders = sub.add_parser("folders", help="Manage the folders to scan")
    folders.add_argument("action", choices=("add", "list", "clear"))
    folders.add_argument("paths", nargs="*")
    folders.set_defaults(func=cmd_folders)

    log = sub.add_parser("log", help="Scan today's commits and generate the summary")
    log.add_argument("--user", required=True, help="Username sent as userId")
    log.add_argument("--author", help="git author filter (default: git config user.name)")
    log.add_argument("--date", type=dt.date.fromisoformat, help="YYYY-MM-DD (default: today)")
    log.add_argument("--folder", action="append", help="Scan only this folder (repeatable)")
    log.add_argument("--template", help="File with a custom output format")
    log.add_argument("--notes", help="Manual activity log to fold into the summary")
    log.add_argument("--save", help="Also write the submitted payload to this file")
    log.set_defaults(func=cmd_log)

    push = sub.add_parser("push", help="Submit a saved (edited) payload file")
    push.add_argument("file")
    push.set_defaults(func=cmd_push)

    show = sub.add_parser("show", help="Show a stored day")
    show.add_argument("--user", required=True)
    show.add_argument("--date", type=dt.date.fromisoformat)
    show.set_defaults(func=cmd_show)

    history = sub.add_parser("history", help="Show today's and the previous summary")
    history.add_argument("--user", required=True)
    history.add_argument("--date", type=dt.date.fromisoformat)
    history.set_defaults(func=cmd_history)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    args.func(args)


if __name__ == "__main__":
    main()
