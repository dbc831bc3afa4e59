"""
Comments component models.

Blog comments are stored unapproved and become public only once an admin
approves them. Deletion is soft so a moderator can restore a comment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from uuid import UUID


class CommentFilter(Enum):
    """Moderation listing filters."""

    ALL = "all"  # Everything not deleted
    PENDING = "pending"
    APPROVED = "approved"
    DELETED = "deleted"


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"
    RESTORE = "restore"


BULK_ACTIONS: frozenset[ModerationAction] = frozenset(
    {ModerationAction.APPROVE, ModerationAction.DELETE}
)


# --- Entity ---


@dataclass
class Comment:
    id: UUID
    post_id: UUID
    author_name: str
    author_email: str
    content: str
    parent_id: UUID | None = None
    is_approved: bool = False
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


# --- Input Models ---


@dataclass(frozen=True)
class ListCommentsInput:
    page: int = 1
    page_size: int = 20
    filter: CommentFilter = CommentFilter.ALL
    post_id: UUID | None = None


@dataclass(frozen=True)
class ModerateCommentInput:
    action: ModerationAction
    comment_id: UUID


@dataclass(frozen=True)
class BulkModerateInput:
    action: ModerationAction
    comment_ids: tuple[UUID, ...]


# --- Output Models ---


@dataclass(frozen=True)
class CommentPage:
    data: list[Comment]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass(frozen=True)
class ModerationOutput:
    success: bool
    affected: int = 0
