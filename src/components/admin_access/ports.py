"""
Admin access ports.
"""

from __future__ import annotations

from typing import Protocol

from src.components.admin_access.models import AdminUser


class IdentityPort(Protocol):
    """Resolves a bearer token to the caller's email address."""

    def resolve(self, token: str) -> str | None:
        """Return the email for a valid token, or None."""
        ...


class AdminRepoPort(Protocol):
    """Admin list membership."""

    def get_by_email(self, email: str) -> AdminUser | None:
        """Look up an admin by lower-cased email."""
        ...

    def add(self, email: str) -> AdminUser:
        """Add an email to the admin list (idempotent)."""
        ...
