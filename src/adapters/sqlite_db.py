"""
SQLite Database Adapter.

Implements the comment, newsletter subscriber and admin list repository
ports using SQLite. Timestamps are stored as ISO-8601 text, ids as UUID text.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from src.components.admin_access.models import AdminUser
from src.components.comments.models import Comment, CommentFilter
from src.components.newsletter.models import NewsletterSubscriber
from src.core.errors import DuplicateKeyError

# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def parse_dt(s: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    return datetime.fromisoformat(s) if s else None


def parse_uuid(s: str | None) -> UUID | None:
    """Parse UUID string."""
    return UUID(s) if s else None


def _placeholders(n: int) -> str:
    return ", ".join("?" for _ in range(n))


# -----------------------------------------------------------------------------
# Base SQLite Repository
# -----------------------------------------------------------------------------


class SQLiteRepoBase:
    """Base class for SQLite repositories."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._external_conn = connection

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection (uses external if provided)."""
        if self._external_conn is not None:
            return self._external_conn

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _should_close(self) -> bool:
        """Whether to close connection after use."""
        return self._external_conn is None


# -----------------------------------------------------------------------------
# Blog comments
# -----------------------------------------------------------------------------

_COMMENT_FILTERS: dict[CommentFilter, str] = {
    CommentFilter.ALL: "is_deleted = 0",
    CommentFilter.PENDING: "is_deleted = 0 AND is_approved = 0",
    CommentFilter.APPROVED: "is_deleted = 0 AND is_approved = 1",
    CommentFilter.DELETED: "is_deleted = 1",
}


class SQLiteCommentRepo(SQLiteRepoBase):
    """SQLite implementation of CommentRepoPort."""

    def insert(self, comment: Comment) -> Comment:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO blog_comments (
                    id, post_id, parent_id, author_name, author_email, content,
                    is_approved, is_deleted, deleted_at, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(comment.id),
                    str(comment.post_id),
                    str(comment.parent_id) if comment.parent_id else None,
                    comment.author_name,
                    comment.author_email,
                    comment.content,
                    comment.is_approved,
                    comment.is_deleted,
                    comment.deleted_at.isoformat() if comment.deleted_at else None,
                    comment.created_at.isoformat(),
                ),
            )
            if self._should_close():
                conn.commit()
            return comment
        finally:
            if self._should_close():
                conn.close()

    def get_by_id(self, comment_id: UUID) -> Comment | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM blog_comments WHERE id = ?", (str(comment_id),)
            ).fetchone()
            return self._map_row(row) if row else None
        finally:
            if self._should_close():
                conn.close()

    def _where(self, filter: CommentFilter, post_id: UUID | None) -> tuple[str, list[Any]]:
        clause = _COMMENT_FILTERS[filter]
        params: list[Any] = []
        if post_id is not None:
            clause += " AND post_id = ?"
            params.append(str(post_id))
        return clause, params

    def list_page(
        self,
        filter: CommentFilter,
        limit: int,
        offset: int,
        post_id: UUID | None = None,
    ) -> list[Comment]:
        where, params = self._where(filter, post_id)
        conn = self._get_conn()
        try:
            rows = conn.execute(
                f"SELECT * FROM blog_comments WHERE {where} "
                "ORDER BY created_at DESC LIMIT ? OFFSET ?",
                (*params, limit, offset),
            ).fetchall()
            return [self._map_row(r) for r in rows]
        finally:
            if self._should_close():
                conn.close()

    def count(self, filter: CommentFilter, post_id: UUID | None = None) -> int:
        where, params = self._where(filter, post_id)
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT COUNT(*) AS n FROM blog_comments WHERE {where}", params
            ).fetchone()
            return int(row["n"])
        finally:
            if self._should_close():
                conn.close()

    def set_approved(self, comment_ids: list[UUID], approved: bool) -> int:
        if not comment_ids:
            return 0
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                f"UPDATE blog_comments SET is_approved = ? "
                f"WHERE id IN ({_placeholders(len(comment_ids))})",
                (approved, *(str(cid) for cid in comment_ids)),
            )
            if self._should_close():
                conn.commit()
            return cursor.rowcount
        finally:
            if self._should_close():
                conn.close()

    def set_deleted(
        self,
        comment_ids: list[UUID],
        deleted: bool,
        deleted_at: datetime | None,
    ) -> int:
        if not comment_ids:
            return 0
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                f"UPDATE blog_comments SET is_deleted = ?, deleted_at = ? "
                f"WHERE id IN ({_placeholders(len(comment_ids))})",
                (
                    deleted,
                    deleted_at.isoformat() if deleted_at else None,
                    *(str(cid) for cid in comment_ids),
                ),
            )
            if self._should_close():
                conn.commit()
            return cursor.rowcount
        finally:
            if self._should_close():
                conn.close()

    def _map_row(self, row: dict[str, Any]) -> Comment:
        return Comment(
            id=UUID(row["id"]),
            post_id=UUID(row["post_id"]),
            parent_id=parse_uuid(row["parent_id"]),
            author_name=row["author_name"],
            author_email=row["author_email"],
            content=row["content"],
            is_approved=bool(row["is_approved"]),
            is_deleted=bool(row["is_deleted"]),
            deleted_at=parse_dt(row["deleted_at"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )


# -----------------------------------------------------------------------------
# Newsletter subscribers
# -----------------------------------------------------------------------------


class SQLiteNewsletterSubscriberRepo(SQLiteRepoBase):
    """SQLite implementation of NewsletterRepoPort."""

    def get_by_id(self, subscriber_id: UUID) -> NewsletterSubscriber | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM newsletter_subscribers WHERE id = ?", (str(subscriber_id),)
            ).fetchone()
            return self._map_row(row) if row else None
        finally:
            if self._should_close():
                conn.close()

    def get_by_email(self, email: str) -> NewsletterSubscriber | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM newsletter_subscribers WHERE email = ?", (email.lower(),)
            ).fetchone()
            return self._map_row(row) if row else None
        finally:
            if self._should_close():
                conn.close()

    def insert(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        conn = self._get_conn()
        try:
            try:
                conn.execute(
                    """
                    INSERT INTO newsletter_subscribers (
                        id, email, name, is_active, subscribed_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        str(subscriber.id),
                        subscriber.email.lower(),
                        subscriber.name,
                        subscriber.is_active,
                        subscriber.subscribed_at.isoformat(),
                        subscriber.updated_at.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateKeyError("newsletter_subscribers", subscriber.email) from e
            if self._should_close():
                conn.commit()
            return subscriber
        finally:
            if self._should_close():
                conn.close()

    def update(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                UPDATE newsletter_subscribers
                SET name = ?, is_active = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    subscriber.name,
                    subscriber.is_active,
                    subscriber.updated_at.isoformat(),
                    str(subscriber.id),
                ),
            )
            if self._should_close():
                conn.commit()
            return subscriber
        finally:
            if self._should_close():
                conn.close()

    def delete(self, subscriber_id: UUID) -> bool:
        conn = self._get_conn()
        try:
            cursor = conn.execute(
                "DELETE FROM newsletter_subscribers WHERE id = ?", (str(subscriber_id),)
            )
            if self._should_close():
                conn.commit()
            return cursor.rowcount > 0
        finally:
            if self._should_close():
                conn.close()

    def _where(self, query: str | None) -> tuple[str, list[Any]]:
        if not query:
            return "1 = 1", []
        # LIKE is case-insensitive for ASCII in SQLite
        pattern = f"%{query}%"
        return "(email LIKE ? OR name LIKE ?)", [pattern, pattern]

    def search(
        self,
        query: str | None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[NewsletterSubscriber]:
        where, params = self._where(query)
        conn = self._get_conn()
        try:
            rows = conn.execute(
                f"SELECT * FROM newsletter_subscribers WHERE {where} "
                "ORDER BY subscribed_at DESC LIMIT ? OFFSET ?",
                (*params, limit, offset),
            ).fetchall()
            return [self._map_row(r) for r in rows]
        finally:
            if self._should_close():
                conn.close()

    def count(self, query: str | None = None) -> int:
        where, params = self._where(query)
        conn = self._get_conn()
        try:
            row = conn.execute(
                f"SELECT COUNT(*) AS n FROM newsletter_subscribers WHERE {where}", params
            ).fetchone()
            return int(row["n"])
        finally:
            if self._should_close():
                conn.close()

    def count_active(self) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM newsletter_subscribers WHERE is_active = 1"
            ).fetchone()
            return int(row["n"])
        finally:
            if self._should_close():
                conn.close()

    def _map_row(self, row: dict[str, Any]) -> NewsletterSubscriber:
        return NewsletterSubscriber(
            id=UUID(row["id"]),
            email=row["email"],
            name=row["name"],
            is_active=bool(row["is_active"]),
            subscribed_at=datetime.fromisoformat(row["subscribed_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


# -----------------------------------------------------------------------------
# Admin list
# -----------------------------------------------------------------------------


class SQLiteAdminRepo(SQLiteRepoBase):
    """SQLite implementation of AdminRepoPort."""

    def get_by_email(self, email: str) -> AdminUser | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM admin_users WHERE email = ?", (email.lower(),)
            ).fetchone()
            return self._map_row(row) if row else None
        finally:
            if self._should_close():
                conn.close()

    def add(self, email: str) -> AdminUser:
        email = email.strip().lower()
        existing = self.get_by_email(email)
        if existing is not None:
            return existing

        admin = AdminUser(id=uuid4(), email=email, created_at=datetime.now(UTC))
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO admin_users (id, email, created_at) VALUES (?, ?, ?) "
                "ON CONFLICT(email) DO NOTHING",
                (str(admin.id), admin.email, admin.created_at.isoformat()),
            )
            if self._should_close():
                conn.commit()
        finally:
            if self._should_close():
                conn.close()
        return self.get_by_email(email) or admin

    def _map_row(self, row: dict[str, Any]) -> AdminUser:
        return AdminUser(
            id=UUID(row["id"]),
            email=row["email"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
