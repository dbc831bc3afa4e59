"""
Admin access component.

Resolves bearer tokens to admin identities.
"""

from src.components.admin_access.component import (
    authorize_admin,
    extract_bearer_token,
    is_admin_email,
)
from src.components.admin_access.models import AdminIdentity, AdminUser
from src.components.admin_access.ports import AdminRepoPort, IdentityPort

__all__ = [
    "authorize_admin",
    "extract_bearer_token",
    "is_admin_email",
    "AdminIdentity",
    "AdminUser",
    "AdminRepoPort",
    "IdentityPort",
]
