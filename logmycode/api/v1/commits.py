"""Commit ingestion endpoint: store a day's commits and generate its summary."""

import logging
from typing import Any

from fastapi import APIRouter

from logmycode.api.deps import DbSession
from logmycode.core.exceptions import InternalServerError
from logmycode.domain import commit_ops, daily_summary_ops
from logmycode.schemas.commits import BulkCommitPayload
from logmycode.services.commits import dedupe_payload, group_unique_commits, groups_to_wire
from logmycode.services.summary import DailyLogInput, daily_summary_generator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["commits"])


@router.post("/commits")
async def ingest_commits(payload: BulkCommitPayload, db: DbSession) -> dict[str, Any]:
    """Store commits, regenerate the day's summary and return it.

    Pipeline: dedupe payload -> upsert user/repos/commits (committed) ->
    re-read the whole day -> generate summary -> upsert summary.

    The commit upsert is committed before generation starts, so a failure
    later in the pipeline keeps the stored commits.
    """
    payload = dedupe_payload(payload)
    day = payload.date.isoformat()

    try:
        await commit_ops.upsert_user_repos_and_commits(db, payload)
        day_commits = await commit_ops.get_for_user_and_date(db, payload.user_id, payload.date)
        groups = group_unique_commits((c.repo_name, c) for c in day_commits)

        result = await daily_summary_generator.generate(
            DailyLogInput(
                user_id=payload.user_id,
                date=day,
                repos=groups,
                template=payload.template,
                manual_log=payload.manual_log,
            )
        )

        await daily_summary_ops.upsert(
            db,
            username=payload.user_id,
            day=payload.date,
            summary=result.text,
            total_commits=len(day_commits),
        )
        await db.commit()
    except Exception as e:
        logger.exception(f"Error processing commits for {payload.user_id} on {day}")
        raise InternalServerError() from e

    logger.info(
        f"Summary for {payload.user_id} on {day}: {result.outcome.value} "
        f"({len(day_commits)} commit(s))"
    )

    return {
        "userId": payload.user_id,
        "date": day,
        "summary": result.text,
        "summaryStatus": result.outcome.value,
        "repos": groups_to_wire(groups),
    }
