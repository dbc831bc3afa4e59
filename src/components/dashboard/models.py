"""
Dashboard component models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardStats:
    """Counters shown on the admin dashboard."""

    pending_comments: int
    active_subscribers: int
