"""
Health endpoints.

Endpoints:
- GET /api/health/contact - Contact form mail configuration and SMTP reachability
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from src.adapters.smtp_email import SMTPEmailAdapter
from src.api.responses import ALL_METHODS, json_response
from src.app_shell.config import ConfigError, EmailConfig, validate_email_config

logger = logging.getLogger(__name__)

router = APIRouter()

SmtpVerifier = Callable[[EmailConfig], Awaitable[bool]]


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


async def verify_smtp(config: EmailConfig) -> bool:
    return await SMTPEmailAdapter(config).verify()


def get_smtp_verifier() -> SmtpVerifier:
    return verify_smtp


@router.api_route("/contact", methods=ALL_METHODS, summary="Contact form health")
async def contact_health(
    request: Request,
    verifier: SmtpVerifier = Depends(get_smtp_verifier),
) -> Response:
    """200 when mail settings are valid (with SMTP reachability), else 503."""
    if request.method != "GET":
        return json_response(
            {
                "status": HealthStatus.UNHEALTHY.value,
                "error": "Method not allowed",
                "email": {"configured": False},
            },
            405,
            {"Allow": "GET"},
        )

    try:
        config = validate_email_config()
    except ConfigError as e:
        logger.error("Contact form health check failed: %s", e)
        return json_response(
            {
                "status": HealthStatus.UNHEALTHY.value,
                "error": str(e),
                "email": {"configured": False},
            },
            503,
        )

    verified = await verifier(config)
    if verified:
        logger.info("Contact form health check: SMTP connection verified")
    return json_response(
        {
            "status": HealthStatus.HEALTHY.value,
            "email": {"configured": True, "verified": verified},
        }
    )
