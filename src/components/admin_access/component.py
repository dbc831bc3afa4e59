"""
Admin access component.

Bearer token → identity → admin list. Every failure collapses into the
same 401 so callers cannot tell which step rejected them.
"""

from __future__ import annotations

import logging

from src.components.admin_access.models import AdminIdentity
from src.components.admin_access.ports import AdminRepoPort, IdentityPort
from src.core.errors import PipelineError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


def is_admin_email(email: str, repo: AdminRepoPort) -> bool:
    return repo.get_by_email(email.strip().lower()) is not None


def authorize_admin(
    authorization: str | None,
    identity: IdentityPort,
    repo: AdminRepoPort,
) -> AdminIdentity:
    """
    Authorize an admin request from its Authorization header.

    Raises:
        PipelineError: UNAUTHORIZED for a missing or invalid token, or a
            caller who is not on the admin list
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise PipelineError.unauthorized()

    email = identity.resolve(token)
    if not email:
        raise PipelineError.unauthorized()

    if not is_admin_email(email, repo):
        logger.info("Rejected admin request from non-admin identity")
        raise PipelineError.unauthorized()

    return AdminIdentity(email=email.lower())
