"""
Admin access models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass
class AdminUser:
    """Row in the admin list. Email is stored lower-cased."""

    id: UUID
    email: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class AdminIdentity:
    """An authenticated caller confirmed to be on the admin list."""

    email: str
