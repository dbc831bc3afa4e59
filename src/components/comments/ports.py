"""
Comments component ports.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.components.comments.models import Comment, CommentFilter


class CommentRepoPort(Protocol):
    """Comment persistence."""

    def insert(self, comment: Comment) -> Comment:
        """Insert a new comment row."""
        ...

    def get_by_id(self, comment_id: UUID) -> Comment | None:
        ...

    def list_page(
        self,
        filter: CommentFilter,
        limit: int,
        offset: int,
        post_id: UUID | None = None,
    ) -> list[Comment]:
        """List comments newest first."""
        ...

    def count(self, filter: CommentFilter, post_id: UUID | None = None) -> int:
        ...

    def set_approved(self, comment_ids: list[UUID], approved: bool) -> int:
        """Set the approval flag. Returns rows affected."""
        ...

    def set_deleted(
        self, comment_ids: list[UUID], deleted: bool, deleted_at: datetime | None
    ) -> int:
        """Soft-delete or restore. Returns rows affected."""
        ...
