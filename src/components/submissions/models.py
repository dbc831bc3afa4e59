"""
Submission pipeline models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.components.validation.models import SubmissionKind, ValidatedRecord


class SubmissionStatus(Enum):
    ACCEPTED = "accepted"
    BOT = "bot"  # Honeypot filled; acknowledged without side effects


@dataclass(frozen=True)
class SubmissionOutcome:
    status: SubmissionStatus
    record: ValidatedRecord | None = None

    @property
    def is_bot(self) -> bool:
        return self.status is SubmissionStatus.BOT


RATE_LIMIT_MESSAGES: dict[SubmissionKind, str] = {
    SubmissionKind.COMMENT: "Too many comments. Please wait a few minutes.",
    SubmissionKind.NEWSLETTER: "Too many attempts. Please try again later.",
    SubmissionKind.CONTACT: "Too many messages. Please wait a few minutes and try again.",
}

FAILURE_MESSAGES: dict[SubmissionKind, str] = {
    SubmissionKind.COMMENT: "Unable to submit comment. Please try again later.",
    SubmissionKind.NEWSLETTER: "Unable to subscribe. Please try again later.",
    SubmissionKind.CONTACT: "Unable to send your message right now. Please try again later.",
}

# Free-text fields run through the sanitizer, per record type
SANITIZED_FIELDS: dict[SubmissionKind, tuple[str, ...]] = {
    SubmissionKind.COMMENT: ("name", "content"),
    SubmissionKind.NEWSLETTER: ("name",),
    SubmissionKind.CONTACT: ("name", "message"),
}
