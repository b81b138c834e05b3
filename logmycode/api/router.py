from fastapi import APIRouter

from logmycode.api.v1 import commits, summaries

api_router = APIRouter(prefix="/api")

api_router.include_router(commits.router)
api_router.include_router(summaries.router)
