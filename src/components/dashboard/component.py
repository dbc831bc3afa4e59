"""
Dashboard component.

Aggregate counters for the admin dashboard: comments awaiting moderation
(not approved, not deleted) and active newsletter subscribers.
"""

from __future__ import annotations

from src.components.comments import CommentFilter, CommentRepoPort
from src.components.dashboard.models import DashboardStats
from src.components.newsletter import NewsletterRepoPort


def run_stats(comments: CommentRepoPort, subscribers: NewsletterRepoPort) -> DashboardStats:
    return DashboardStats(
        pending_comments=comments.count(CommentFilter.PENDING),
        active_subscribers=subscribers.count_active(),
    )
