"""
Submission pipeline.

Every public flow runs the same admission steps before its side effect:
rate limit → honeypot → validate → sanitize → recheck. A filled honeypot
short-circuits to a BOT outcome so the caller can acknowledge without
persisting anything. Sanitized fields are length-checked again, so a field
that was mostly markup is rejected rather than stored short.
"""

from __future__ import annotations

import logging
from typing import Any, cast

from src.app_shell.rate_limit import RateLimiter
from src.components.comments import CommentRepoPort, submit_comment
from src.components.contact import CaptchaVerifierPort, ContactSettings, forward_contact
from src.components.newsletter import (
    NewsletterRepoPort,
    SubscribeInput,
    mask_email,
    run_subscribe,
)
from src.components.submissions.models import (
    RATE_LIMIT_MESSAGES,
    SANITIZED_FIELDS,
    SubmissionOutcome,
    SubmissionStatus,
)
from src.components.validation import (
    CommentRecord,
    ContactRecord,
    NewsletterRecord,
    SubmissionKind,
    ValidatedRecord,
    honeypot_triggered,
    recheck,
    validate,
)
from src.core.errors import ErrorKind, PipelineError
from src.core.ports.email import EmailPort
from src.domain.sanitize import sanitize_fields
from src.rules.models import SubmissionRules

logger = logging.getLogger(__name__)

_BOT = SubmissionOutcome(status=SubmissionStatus.BOT)


def enforce_rate_limit(kind: SubmissionKind, client_ip: str, limiter: RateLimiter) -> None:
    decision = limiter.check_rate_limit(client_ip)
    if not decision.allowed:
        logger.info("Rate limit hit for %s submission from %s", kind.value, client_ip)
        raise PipelineError(
            ErrorKind.RATE_LIMITED,
            RATE_LIMIT_MESSAGES[kind],
            retry_after_ms=decision.retry_after_ms,
        )


def admit(
    kind: SubmissionKind,
    payload: Any,
    client_ip: str,
    *,
    limiter: RateLimiter,
    rules: SubmissionRules | None = None,
) -> ValidatedRecord | None:
    """
    Run the shared admission steps.

    Returns the sanitized record, or None when the honeypot was filled.

    Raises:
        PipelineError: RATE_LIMITED or VALIDATION
    """
    enforce_rate_limit(kind, client_ip, limiter)

    if honeypot_triggered(payload):
        logger.warning("Honeypot triggered on %s submission from %s", kind.value, client_ip)
        return None

    record = validate(kind, payload, rules)
    return recheck(sanitize_fields(record, SANITIZED_FIELDS[kind]), rules)


def handle_comment(
    payload: Any,
    client_ip: str,
    *,
    limiter: RateLimiter,
    repo: CommentRepoPort,
    rules: SubmissionRules | None = None,
) -> SubmissionOutcome:
    record = cast(
        "CommentRecord | None",
        admit(SubmissionKind.COMMENT, payload, client_ip, limiter=limiter, rules=rules),
    )
    if record is None:
        return _BOT

    submit_comment(record, repo)
    logger.info("Comment submitted for post %s from %s", record.post_id, client_ip)
    return SubmissionOutcome(status=SubmissionStatus.ACCEPTED, record=record)


def handle_newsletter(
    payload: Any,
    client_ip: str,
    *,
    limiter: RateLimiter,
    repo: NewsletterRepoPort,
    rules: SubmissionRules | None = None,
) -> SubmissionOutcome:
    record = cast(
        "NewsletterRecord | None",
        admit(SubmissionKind.NEWSLETTER, payload, client_ip, limiter=limiter, rules=rules),
    )
    if record is None:
        return _BOT

    out = run_subscribe(SubscribeInput(email=record.email, name=record.name), repo)
    logger.info(
        "Newsletter %s: %s",
        "reactivation" if out.reactivated else "subscription",
        mask_email(record.email),
    )
    return SubmissionOutcome(status=SubmissionStatus.ACCEPTED, record=record)


async def handle_contact(
    payload: Any,
    client_ip: str,
    *,
    limiter: RateLimiter,
    notifier: EmailPort,
    settings: ContactSettings,
    captcha: CaptchaVerifierPort | None = None,
    rules: SubmissionRules | None = None,
) -> SubmissionOutcome:
    record = cast(
        "ContactRecord | None",
        admit(SubmissionKind.CONTACT, payload, client_ip, limiter=limiter, rules=rules),
    )
    if record is None:
        return _BOT

    await forward_contact(
        record,
        notifier=notifier,
        settings=settings,
        captcha=captcha,
        client_ip=client_ip or None,
    )
    logger.info("Contact form submitted from %s", client_ip)
    return SubmissionOutcome(status=SubmissionStatus.ACCEPTED, record=record)
