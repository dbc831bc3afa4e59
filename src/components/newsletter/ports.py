"""
Newsletter component ports.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.components.newsletter.models import NewsletterSubscriber


class NewsletterRepoPort(Protocol):
    """
    Newsletter subscriber repository interface.

    The email column is unique; `insert` raises DuplicateKeyError when a
    concurrent insert for the same email won the race.
    """

    def get_by_id(self, subscriber_id: UUID) -> NewsletterSubscriber | None:
        """Get subscriber by ID."""
        ...

    def get_by_email(self, email: str) -> NewsletterSubscriber | None:
        """Get subscriber by email address."""
        ...

    def insert(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        """Insert a new subscriber row."""
        ...

    def update(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        """Update an existing subscriber row."""
        ...

    def delete(self, subscriber_id: UUID) -> bool:
        """Delete subscriber by ID. Returns False if it did not exist."""
        ...

    def search(
        self,
        query: str | None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[NewsletterSubscriber]:
        """List subscribers newest first, optionally filtered by email/name substring."""
        ...

    def count(self, query: str | None = None) -> int:
        """Count subscribers matching the optional search."""
        ...

    def count_active(self) -> int:
        """Count subscribers currently receiving the newsletter."""
        ...
