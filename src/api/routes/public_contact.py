"""
Public contact form endpoint.

Endpoints:
- POST /api/contact - Forward a contact message to the site owner
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from src.adapters.recaptcha import RecaptchaVerifier
from src.api.deps import (
    get_captcha_verifier,
    get_contact_notifier,
    get_contact_settings,
    get_rate_limiter,
    get_rules,
)
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
from src.components.contact import CONTACT_UNAVAILABLE, ContactSettings
from src.components.submissions import FAILURE_MESSAGES, handle_contact
from src.components.validation import SubmissionKind
from src.core.errors import PipelineError
from src.core.ports.email import EmailPort
from src.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route("/contact", methods=ALL_METHODS, summary="Send a contact message")
async def contact(
    request: Request,
    notifier: EmailPort | None = Depends(get_contact_notifier),
    settings: ContactSettings = Depends(get_contact_settings),
    captcha: RecaptchaVerifier | None = Depends(get_captcha_verifier),
    limiter: RateLimiter = Depends(get_rate_limiter),
    rules: Rules = Depends(get_rules),
    headers: dict[str, str] = Depends(get_security_headers),
) -> Response:
    """
    Forward a contact message. 503 while mail delivery is not configured.
    """
    if request.method != "POST":
        return method_not_allowed("POST", headers=headers)

    if notifier is None:
        logger.error("Email configuration invalid - contact form unavailable")
        return failure_response(CONTACT_UNAVAILABLE, 503, headers)

    client_ip = get_client_ip(request)
    try:
        require_json_content_type(request)
        payload = await read_json(request)
        outcome = await handle_contact(
            payload,
            client_ip,
            limiter=limiter,
            notifier=notifier,
            settings=settings,
            captcha=captcha,
            rules=rules.submissions,
        )
    except PipelineError as e:
        return error_response(e, headers)
    except Exception:
        logger.exception("Contact form submission failed (ip=%s)", client_ip)
        return failure_response(FAILURE_MESSAGES[SubmissionKind.CONTACT], 500, headers)

    if outcome.is_bot:
        return no_content(headers)
    return success_response(headers)
