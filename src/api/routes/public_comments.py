"""
Public blog comment endpoint.

Endpoints:
- POST /api/blog/comments - Submit a comment for moderation
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteCommentRepo
from src.api.deps import get_comment_repo, get_rate_limiter, get_rules
from src.api.responses import (
    ALL_METHODS,
    error_response,
    failure_response,
    get_client_ip,
    get_security_headers,
    method_not_allowed,
    no_content,
    read_json,
    require_json_content_type,
    success_response,
)
from src.app_shell.rate_limit import RateLimiter
from src.components.submissions import FAILURE_MESSAGES, handle_comment
from src.components.validation import SubmissionKind
from src.core.errors import PipelineError
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route("/comments", methods=ALL_METHODS, summary="Submit a blog comment")
async def submit_comment(
    request: Request,
    repo: SQLiteCommentRepo = Depends(get_comment_repo),
    limiter: RateLimiter = Depends(get_rate_limiter),
    rules: Rules = Depends(get_rules),
    headers: dict[str, str] = Depends(get_security_headers),
) -> Response:
    """
    Accept a comment. Stored unapproved; 204 for honeypot hits.
    """
    if request.method != "POST":
        return method_not_allowed("POST", headers=headers)

    client_ip = get_client_ip(request)
    try:
        require_json_content_type(request)
        payload = await read_json(request)
        outcome = await run_in_threadpool(
            handle_comment,
            payload,
            client_ip,
            limiter=limiter,
            repo=repo,
            rules=rules.submissions,
        )
    except PipelineError as e:
        return error_response(e, headers)
    except Exception:
        logger.exception("Comment submission failed (ip=%s)", client_ip)
        return failure_response(FAILURE_MESSAGES[SubmissionKind.COMMENT], 500, headers)

    if outcome.is_bot:
        return no_content(headers)
    return success_response(headers)
