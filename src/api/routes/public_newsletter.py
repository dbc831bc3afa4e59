"""
Public newsletter subscription endpoint.

Endpoints:
- POST /api/blog/subscribe - Subscribe (or reactivate) an email address
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteNewsletterSubscriberRepo
from src.api.deps import get_newsletter_repo, get_rate_limiter, get_rules
from src.api.responses import (
    ALL_METHODS,
    error_response,
    failure_response,
    get_client_ip,
    get_security_headers,
    method_not_allowed,
    no_content,
    read_json,
    success_response,
)
from src.app_shell.rate_limit import RateLimiter
from src.components.submissions import FAILURE_MESSAGES, handle_newsletter
from src.components.validation import SubmissionKind
from src.core.errors import PipelineError
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route("/subscribe", methods=ALL_METHODS, summary="Subscribe to the newsletter")
async def subscribe(
    request: Request,
    repo: SQLiteNewsletterSubscriberRepo = Depends(get_newsletter_repo),
    limiter: RateLimiter = Depends(get_rate_limiter),
    rules: Rules = Depends(get_rules),
    headers: dict[str, str] = Depends(get_security_headers),
) -> Response:
    """
    Subscribe an email address.

    Already-active addresses get 400 "Already subscribed"; inactive ones are
    reactivated.
    """
    if request.method != "POST":
        return method_not_allowed("POST", headers=headers)

    client_ip = get_client_ip(request)
    try:
        payload = await read_json(request)
        outcome = await run_in_threadpool(
            handle_newsletter,
            payload,
            client_ip,
            limiter=limiter,
            repo=repo,
            rules=rules.submissions,
        )
    except PipelineError as e:
        return error_response(e, headers)
    except Exception:
        logger.exception("Newsletter subscription failed (ip=%s)", client_ip)
        return failure_response(FAILURE_MESSAGES[SubmissionKind.NEWSLETTER], 500, headers)

    if outcome.is_bot:
        return no_content(headers)
    return success_response(headers)
