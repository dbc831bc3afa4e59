"""
Admin verification endpoint.

Endpoints:
- POST /api/admin/auth/verify - Report whether an email is on the admin list
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteAdminRepo
from src.api.deps import get_admin_repo
from src.api.responses import ALL_METHODS, json_response, method_not_allowed, read_json
from src.components.admin_access import is_admin_email
from src.core.errors import PipelineError

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_REQUIRED = "Email is required"


@router.api_route("/verify", methods=ALL_METHODS, summary="Check admin list membership")
async def verify_admin(
    request: Request,
    admin_repo: SQLiteAdminRepo = Depends(get_admin_repo),
) -> Response:
    """Returns `{isAdmin}`; errors use `{isAdmin: false, error}`."""
    if request.method != "POST":
        return method_not_allowed("POST", body_key="isAdmin")

    try:
        body = await read_json(request)
    except PipelineError as e:
        return json_response({"isAdmin": False, "error": e.message}, 400)

    email = body.get("email") if isinstance(body, dict) else None
    if not isinstance(email, str) or not email.strip():
        return json_response({"isAdmin": False, "error": EMAIL_REQUIRED}, 400)

    try:
        is_admin = await run_in_threadpool(is_admin_email, email, admin_repo)
    except Exception:
        logger.exception("Admin verification failed")
        return json_response({"isAdmin": False, "error": "Verification failed"}, 500)

    return json_response({"isAdmin": is_admin})
