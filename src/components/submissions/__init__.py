"""
Submissions component.

Shared admission pipeline for the public comment, newsletter and contact
flows.
"""

from src.components.submissions.component import (
    admit,
    enforce_rate_limit,
    handle_comment,
    handle_contact,
    handle_newsletter,
)
from src.components.submissions.models import (
    FAILURE_MESSAGES,
    RATE_LIMIT_MESSAGES,
    SANITIZED_FIELDS,
    SubmissionOutcome,
    SubmissionStatus,
)

__all__ = [
    "admit",
    "enforce_rate_limit",
    "handle_comment",
    "handle_newsletter",
    "handle_contact",
    "SubmissionOutcome",
    "SubmissionStatus",
    "RATE_LIMIT_MESSAGES",
    "FAILURE_MESSAGES",
    "SANITIZED_FIELDS",
]
