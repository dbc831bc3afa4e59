"""
Admin dashboard stats API.

Endpoints:
- GET /api/admin/stats - Pending comment and active subscriber counts
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteCommentRepo, SQLiteNewsletterSubscriberRepo
from src.api.deps import get_comment_repo, get_newsletter_repo, require_admin
from src.api.responses import ALL_METHODS, failure_response, json_response, method_not_allowed
from src.components.admin_access import AdminIdentity
from src.components.dashboard import run_stats

logger = logging.getLogger(__name__)

router = APIRouter()


class StatsResponse(BaseModel):
    pending_comments: int = Field(serialization_alias="pendingComments")
    active_subscribers: int = Field(serialization_alias="activeSubscribers")


@router.api_route("/stats", methods=ALL_METHODS, summary="Dashboard statistics")
async def admin_stats(
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    comments: SQLiteCommentRepo = Depends(get_comment_repo),
    subscribers: SQLiteNewsletterSubscriberRepo = Depends(get_newsletter_repo),
) -> Response:
    if request.method != "GET":
        return method_not_allowed("GET")

    try:
        stats = await run_in_threadpool(run_stats, comments, subscribers)
    except Exception:
        logger.exception("Failed to fetch dashboard stats")
        return failure_response("Failed to fetch stats", 500)

    body = StatsResponse(
        pending_comments=stats.pending_comments,
        active_subscribers=stats.active_subscribers,
    )
    return json_response(body.model_dump(by_alias=True))
