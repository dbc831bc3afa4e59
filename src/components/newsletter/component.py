"""
Newsletter component.

Subscription state machine and subscriber administration.

Key behaviors:
- New email → inserted as active
- Inactive subscriber → reactivated (name refreshed when given)
- Active subscriber → "Already subscribed"
- Unique-email collision on insert (concurrent signup) → "Already subscribed"
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from uuid import uuid4

from src.components.newsletter.models import (
    DeleteSubscriberInput,
    DeleteSubscriberOutput,
    ListSubscribersInput,
    NewsletterSubscriber,
    SubscribeInput,
    SubscribeOutput,
    SubscriberPage,
    SubscriberState,
    can_transition,
)
from src.components.newsletter.ports import NewsletterRepoPort
from src.core.errors import DuplicateKeyError, ErrorKind, PipelineError

ALREADY_SUBSCRIBED = "Already subscribed"
MAX_PAGE_SIZE = 100

_MASK = re.compile(r"^([^@]{1,3})[^@]*@")


# --- Pure Functions ---


def mask_email(email: str) -> str:
    """Mask an address for logs: keep three leading characters and the domain."""
    return _MASK.sub(r"\1***@", email)


def subscriber_state(subscriber: NewsletterSubscriber | None) -> SubscriberState:
    if subscriber is None:
        return SubscriberState.ABSENT
    return subscriber.state


def create_subscriber(
    email: str,
    name: str | None = None,
    now: datetime | None = None,
) -> NewsletterSubscriber:
    now = now or datetime.now(UTC)
    return NewsletterSubscriber(
        id=uuid4(),
        email=email.lower(),
        name=name,
        is_active=True,
        subscribed_at=now,
        updated_at=now,
    )


def reactivate_subscriber(
    subscriber: NewsletterSubscriber,
    name: str | None = None,
    now: datetime | None = None,
) -> NewsletterSubscriber:
    """Inactive → active. Keeps the stored name unless a new one is supplied."""
    return NewsletterSubscriber(
        id=subscriber.id,
        email=subscriber.email,
        name=name or subscriber.name,
        is_active=True,
        subscribed_at=subscriber.subscribed_at,
        updated_at=now or datetime.now(UTC),
    )


def _already_subscribed() -> PipelineError:
    return PipelineError(ErrorKind.ALREADY_EXISTS, ALREADY_SUBSCRIBED)


# --- Run Handlers ---


def run_subscribe(inp: SubscribeInput, repo: NewsletterRepoPort) -> SubscribeOutput:
    """
    Subscribe an email address.

    Raises:
        PipelineError: ALREADY_EXISTS when the address is already active
    """
    email = inp.email.lower()
    existing = repo.get_by_email(email)
    state = subscriber_state(existing)

    if not can_transition(state, SubscriberState.ACTIVE):
        raise _already_subscribed()

    if existing is not None:
        reactivated = repo.update(reactivate_subscriber(existing, inp.name))
        return SubscribeOutput(success=True, subscriber_id=reactivated.id, reactivated=True)

    try:
        saved = repo.insert(create_subscriber(email, inp.name))
    except DuplicateKeyError:
        raise _already_subscribed() from None

    return SubscribeOutput(success=True, subscriber_id=saved.id)


def run_list(inp: ListSubscribersInput, repo: NewsletterRepoPort) -> SubscriberPage:
    if inp.page < 1:
        raise PipelineError.validation("page must be at least 1")
    if not 1 <= inp.page_size <= MAX_PAGE_SIZE:
        raise PipelineError.validation(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")

    search = inp.search.strip() if inp.search else None
    offset = (inp.page - 1) * inp.page_size

    return SubscriberPage(
        data=repo.search(search or None, limit=inp.page_size, offset=offset),
        total=repo.count(search or None),
        page=inp.page,
        page_size=inp.page_size,
    )


def run_delete(inp: DeleteSubscriberInput, repo: NewsletterRepoPort) -> DeleteSubscriberOutput:
    if not repo.delete(inp.subscriber_id):
        raise PipelineError(ErrorKind.NOT_FOUND, "Subscriber not found")
    return DeleteSubscriberOutput(success=True)


def run(
    inp: SubscribeInput | ListSubscribersInput | DeleteSubscriberInput,
    *,
    repo: NewsletterRepoPort,
) -> SubscribeOutput | SubscriberPage | DeleteSubscriberOutput:
    """
    Main component entry point.

    Args:
        inp: Input command
        repo: Repository port (Required)

    Returns:
        Operation result
    """
    if isinstance(inp, SubscribeInput):
        return run_subscribe(inp, repo)
    elif isinstance(inp, ListSubscribersInput):
        return run_list(inp, repo)
    elif isinstance(inp, DeleteSubscriberInput):
        return run_delete(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
