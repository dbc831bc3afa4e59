"""
Comments component.

Stores validated, sanitized comments as unapproved rows and backs the admin
moderation API (list, approve, reject, soft delete, restore, bulk actions).
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

from src.components.comments.models import (
    BULK_ACTIONS,
    BulkModerateInput,
    Comment,
    CommentPage,
    ListCommentsInput,
    ModerateCommentInput,
    ModerationAction,
    ModerationOutput,
)
from src.components.comments.ports import CommentRepoPort
from src.components.validation.models import CommentRecord
from src.core.errors import PipelineError

MAX_PAGE_SIZE = 100


def build_comment(record: CommentRecord, now: datetime | None = None) -> Comment:
    """Create an unapproved comment from a validated record."""
    return Comment(
        id=uuid4(),
        post_id=record.post_id,
        author_name=record.name,
        author_email=record.email,
        content=record.content,
        is_approved=False,
        created_at=now or datetime.now(UTC),
    )


def submit_comment(record: CommentRecord, repo: CommentRepoPort) -> Comment:
    """Persist a new comment awaiting moderation."""
    return repo.insert(build_comment(record))


def list_comments(inp: ListCommentsInput, repo: CommentRepoPort) -> CommentPage:
    if inp.page < 1:
        raise PipelineError.validation("page must be at least 1")
    if not 1 <= inp.page_size <= MAX_PAGE_SIZE:
        raise PipelineError.validation(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")

    offset = (inp.page - 1) * inp.page_size
    data = repo.list_page(inp.filter, limit=inp.page_size, offset=offset, post_id=inp.post_id)
    total = repo.count(inp.filter, post_id=inp.post_id)

    return CommentPage(data=data, total=total, page=inp.page, page_size=inp.page_size)


def _apply(
    action: ModerationAction,
    ids: list[UUID],
    repo: CommentRepoPort,
    now: datetime,
) -> int:
    if action is ModerationAction.APPROVE:
        return repo.set_approved(ids, True)
    if action is ModerationAction.REJECT:
        return repo.set_approved(ids, False)
    if action is ModerationAction.DELETE:
        return repo.set_deleted(ids, True, now)
    if action is ModerationAction.RESTORE:
        return repo.set_deleted(ids, False, None)
    raise ValueError(f"Unknown moderation action: {action}")


def moderate_comment(
    inp: ModerateCommentInput,
    repo: CommentRepoPort,
    now: datetime | None = None,
) -> ModerationOutput:
    affected = _apply(inp.action, [inp.comment_id], repo, now or datetime.now(UTC))
    return ModerationOutput(success=True, affected=affected)


def bulk_moderate(
    inp: BulkModerateInput,
    repo: CommentRepoPort,
    now: datetime | None = None,
) -> ModerationOutput:
    if inp.action not in BULK_ACTIONS:
        raise PipelineError.validation("Invalid bulk action")
    if not inp.comment_ids:
        return ModerationOutput(success=True, affected=0)

    affected = _apply(inp.action, list(inp.comment_ids), repo, now or datetime.now(UTC))
    return ModerationOutput(success=True, affected=affected)


def run(
    inp: ListCommentsInput | ModerateCommentInput | BulkModerateInput,
    *,
    repo: CommentRepoPort,
) -> CommentPage | ModerationOutput:
    """Main component entry point."""
    if isinstance(inp, ListCommentsInput):
        return list_comments(inp, repo)
    elif isinstance(inp, ModerateCommentInput):
        return moderate_comment(inp, repo)
    elif isinstance(inp, BulkModerateInput):
        return bulk_moderate(inp, repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
