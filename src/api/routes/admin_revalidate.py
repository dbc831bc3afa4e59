"""
On-demand revalidation endpoint.

Endpoints:
- POST /api/revalidate - Refresh the blog listing and optionally one post page

Called after admin content changes so public pages reflect them immediately.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from src.adapters.auth.crypto import JWTIdentityAdapter
from src.adapters.sqlite_db import SQLiteAdminRepo
from src.api.deps import get_admin_repo, get_identity_adapter, get_revalidation_port, get_rules
from src.api.responses import (
    ALL_METHODS,
    error_response,
    failure_response,
    method_not_allowed,
    read_json,
    success_response,
)
from src.components.admin_access import authorize_admin
from src.components.revalidation import (
    RevalidateInput,
    RevalidationPort,
    revalidate,
)
from src.core.errors import PipelineError
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

REVALIDATION_FAILED = "Revalidation failed"


@router.api_route("/revalidate", methods=ALL_METHODS, summary="Revalidate blog pages")
async def revalidate_pages(
    request: Request,
    identity: JWTIdentityAdapter = Depends(get_identity_adapter),
    admin_repo: SQLiteAdminRepo = Depends(get_admin_repo),
    port: RevalidationPort = Depends(get_revalidation_port),
    rules: Rules = Depends(get_rules),
) -> Response:
    if request.method != "POST":
        return method_not_allowed("POST")

    try:
        await run_in_threadpool(
            authorize_admin, request.headers.get("Authorization"), identity, admin_repo
        )
    except PipelineError as e:
        return error_response(e)

    # An unreadable body means no slug; only the listing is refreshed
    try:
        body = await read_json(request)
    except PipelineError:
        body = None
    slug = body.get("slug") if isinstance(body, dict) else None

    try:
        await revalidate(
            RevalidateInput(slug=slug if isinstance(slug, str) else None),
            port,
            rules.revalidation,
        )
    except Exception:
        logger.exception("Revalidation error")
        return failure_response(REVALIDATION_FAILED, 500)

    return success_response(revalidated=True)
