"""
Validation component.

Parses and constrains raw comment, newsletter and contact payloads.
"""

from src.components.validation.component import (
    EMAIL_REGEX,
    HONEYPOT_FIELD,
    honeypot_triggered,
    recheck,
    validate,
    validate_comment,
    validate_contact,
    validate_newsletter,
)
from src.components.validation.models import (
    CommentRecord,
    ContactRecord,
    NewsletterRecord,
    SubmissionKind,
    ValidatedRecord,
)

__all__ = [
    # Entry point
    "validate",
    "recheck",
    # Validators
    "validate_comment",
    "validate_newsletter",
    "validate_contact",
    "honeypot_triggered",
    # Constants
    "EMAIL_REGEX",
    "HONEYPOT_FIELD",
    # Models
    "SubmissionKind",
    "CommentRecord",
    "NewsletterRecord",
    "ContactRecord",
    "ValidatedRecord",
]
