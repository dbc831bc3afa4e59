"""
Comments component.

Unapproved comment storage and admin moderation.
"""

from src.components.comments.component import (
    MAX_PAGE_SIZE,
    build_comment,
    bulk_moderate,
    list_comments,
    moderate_comment,
    run,
    submit_comment,
)
from src.components.comments.models import (
    BULK_ACTIONS,
    BulkModerateInput,
    Comment,
    CommentFilter,
    CommentPage,
    ListCommentsInput,
    ModerateCommentInput,
    ModerationAction,
    ModerationOutput,
)
from src.components.comments.ports import CommentRepoPort

__all__ = [
    # Component
    "run",
    "build_comment",
    "submit_comment",
    "list_comments",
    "moderate_comment",
    "bulk_moderate",
    "MAX_PAGE_SIZE",
    # Models
    "Comment",
    "CommentFilter",
    "CommentPage",
    "ModerationAction",
    "BULK_ACTIONS",
    "ListCommentsInput",
    "ModerateCommentInput",
    "BulkModerateInput",
    "ModerationOutput",
    # Ports
    "CommentRepoPort",
]
