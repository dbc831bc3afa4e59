"""
Admin comment moderation API.

Endpoints:
- GET /api/admin/comments - List comments (page, pageSize, filter, postId)
- PUT /api/admin/comments - Moderate one comment ({action, id}) or many ({action, ids})
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteCommentRepo
from src.api.deps import get_comment_repo, require_admin
from src.api.responses import (
    ALL_METHODS,
    error_response,
    failure_response,
    method_not_allowed,
    parse_uuid,
    query_int,
    read_json,
    success_response,
)
from src.components.admin_access import AdminIdentity
from src.components.comments import (
    BulkModerateInput,
    Comment,
    CommentFilter,
    ListCommentsInput,
    ModerateCommentInput,
    ModerationAction,
    bulk_moderate,
    list_comments,
    moderate_comment,
)
from src.core.errors import PipelineError

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Response Models ---


class CommentResponse(BaseModel):
    id: str
    post_id: str
    parent_id: str | None = None
    author_name: str
    author_email: str
    content: str
    is_approved: bool
    is_deleted: bool
    deleted_at: str | None = None
    created_at: str


class CommentListResponse(BaseModel):
    data: list[CommentResponse]
    total: int
    page: int
    page_size: int = Field(serialization_alias="pageSize")
    total_pages: int = Field(serialization_alias="totalPages")


def _comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=str(comment.id),
        post_id=str(comment.post_id),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        author_name=comment.author_name,
        author_email=comment.author_email,
        content=comment.content,
        is_approved=comment.is_approved,
        is_deleted=comment.is_deleted,
        deleted_at=comment.deleted_at.isoformat() if comment.deleted_at else None,
        created_at=comment.created_at.isoformat(),
    )


# --- Request parsing ---


def _parse_list_query(request: Request) -> ListCommentsInput:
    raw_filter = request.query_params.get("filter") or CommentFilter.ALL.value
    try:
        filter = CommentFilter(raw_filter)
    except ValueError:
        raise PipelineError.validation("Invalid filter") from None

    raw_post_id = request.query_params.get("postId")
    post_id = parse_uuid(raw_post_id, "Invalid post ID") if raw_post_id else None

    return ListCommentsInput(
        page=query_int(request, "page", 1),
        page_size=query_int(request, "pageSize", 20),
        filter=filter,
        post_id=post_id,
    )


def _parse_action(value: Any, message: str) -> ModerationAction:
    try:
        return ModerationAction(value)
    except ValueError:
        raise PipelineError.validation(message) from None


def _parse_moderation(body: Any) -> ModerateCommentInput | BulkModerateInput:
    if not isinstance(body, dict):
        raise PipelineError.validation("Missing id or ids")

    action, comment_id, ids = body.get("action"), body.get("id"), body.get("ids")

    if comment_id:
        return ModerateCommentInput(
            action=_parse_action(action, "Invalid action"),
            comment_id=parse_uuid(comment_id, "Invalid comment ID"),
        )

    if isinstance(ids, list):
        return BulkModerateInput(
            action=_parse_action(action, "Invalid bulk action"),
            comment_ids=tuple(parse_uuid(i, "Invalid comment ID") for i in ids),
        )

    raise PipelineError.validation("Missing id or ids")


# --- Endpoint ---


@router.api_route("/comments", methods=ALL_METHODS, summary="List or moderate comments")
async def admin_comments(
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    repo: SQLiteCommentRepo = Depends(get_comment_repo),
) -> Response:
    if request.method == "GET":
        try:
            page = await run_in_threadpool(list_comments, _parse_list_query(request), repo)
        except PipelineError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching comments")
            return failure_response("Failed to fetch comments", 500)

        body = CommentListResponse(
            data=[_comment_to_response(c) for c in page.data],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
        return success_response(**body.model_dump(by_alias=True))

    if request.method == "PUT":
        try:
            inp = _parse_moderation(await read_json(request))
            if isinstance(inp, ModerateCommentInput):
                out = await run_in_threadpool(moderate_comment, inp, repo)
            else:
                out = await run_in_threadpool(bulk_moderate, inp, repo)
        except PipelineError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating comments")
            return failure_response("Failed to update comments", 500)

        logger.info("Comments moderated by %s (%d affected)", admin.email, out.affected)
        return success_response()

    return method_not_allowed("GET", "PUT")
