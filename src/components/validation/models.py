"""
Validation component models.

Typed records produced from raw submission payloads. A record only exists
if every field satisfied its constraint.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class SubmissionKind(Enum):
    """Public submission flows."""

    COMMENT = "comment"
    NEWSLETTER = "newsletter"
    CONTACT = "contact"


@dataclass(frozen=True)
class CommentRecord:
    """Validated blog comment."""

    post_id: UUID
    name: str
    email: str
    content: str
    honeypot: str = ""


@dataclass(frozen=True)
class NewsletterRecord:
    """Validated newsletter signup. Email is lower-cased (subscriber key)."""

    email: str
    name: str | None = None
    honeypot: str = ""


@dataclass(frozen=True)
class ContactRecord:
    """Validated contact-form message."""

    name: str
    email: str
    message: str
    honeypot: str = ""
    recaptcha_token: str | None = None


ValidatedRecord = CommentRecord | NewsletterRecord | ContactRecord
