"""
Admin newsletter subscribers API.

Endpoints:
- GET /api/admin/subscribers - List subscribers (page, pageSize, search)
- DELETE /api/admin/subscribers?id=<uuid> - Remove a subscriber
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from src.adapters.sqlite_db import SQLiteNewsletterSubscriberRepo
from src.api.deps import get_newsletter_repo, require_admin
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
from src.components.newsletter import (
    DeleteSubscriberInput,
    ListSubscribersInput,
    NewsletterSubscriber,
    mask_email,
    run_delete,
    run_list,
)
from src.core.errors import PipelineError

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Response Models ---


class SubscriberResponse(BaseModel):
    id: str
    email: str
    name: str | None = None
    is_active: bool
    subscribed_at: str
    updated_at: str


class SubscriberListResponse(BaseModel):
    data: list[SubscriberResponse]
    total: int
    page: int
    page_size: int = Field(serialization_alias="pageSize")
    total_pages: int = Field(serialization_alias="totalPages")


def _subscriber_to_response(subscriber: NewsletterSubscriber) -> SubscriberResponse:
    return SubscriberResponse(
        id=str(subscriber.id),
        email=subscriber.email,
        name=subscriber.name,
        is_active=subscriber.is_active,
        subscribed_at=subscriber.subscribed_at.isoformat(),
        updated_at=subscriber.updated_at.isoformat(),
    )


# --- Endpoint ---


@router.api_route("/subscribers", methods=ALL_METHODS, summary="List or delete subscribers")
async def admin_subscribers(
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    repo: SQLiteNewsletterSubscriberRepo = Depends(get_newsletter_repo),
) -> Response:
    if request.method == "GET":
        try:
            inp = ListSubscribersInput(
                page=query_int(request, "page", 1),
                page_size=query_int(request, "pageSize", 20),
                search=request.query_params.get("search"),
            )
            page = await run_in_threadpool(run_list, inp, repo)
        except PipelineError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching subscribers")
            return failure_response("Failed to fetch subscribers", 500)

        body = SubscriberListResponse(
            data=[_subscriber_to_response(s) for s in page.data],
            total=page.total,
            page=page.page,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
        return success_response(**body.model_dump(by_alias=True))

    if request.method == "DELETE":
        try:
            raw_id = request.query_params.get("id")
            if not raw_id:
                body = await read_json(request)
                raw_id = body.get("id") if isinstance(body, dict) else None
            if not raw_id:
                raise PipelineError.validation("Missing subscriber ID")

            subscriber_id = parse_uuid(raw_id, "Invalid subscriber ID")
            existing = await run_in_threadpool(repo.get_by_id, subscriber_id)
            await run_in_threadpool(
                run_delete, DeleteSubscriberInput(subscriber_id=subscriber_id), repo
            )
        except PipelineError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error deleting subscriber")
            return failure_response("Failed to delete subscriber", 500)

        if existing is not None:
            logger.info("Subscriber %s deleted by %s", mask_email(existing.email), admin.email)
        return success_response()

    return method_not_allowed("GET", "DELETE")
