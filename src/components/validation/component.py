"""
Input validation for public submissions.

Each validator trims, checks fields in declared order and raises a
PipelineError(VALIDATION) carrying the first violated constraint. Nothing
is returned unless the whole payload is valid.

Field order:
- comment: postId, name, email, content, honeypot
- newsletter: email, name, honeypot
- contact: name, email, message (honeypot and recaptchaToken pass through)

Every email is capped at 254 characters, not only the contact address
(whose cap comes from the contact rules).
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from src.components.validation.models import (
    CommentRecord,
    ContactRecord,
    NewsletterRecord,
    SubmissionKind,
    ValidatedRecord,
)
from src.core.errors import PipelineError
from src.rules.models import (
    CommentRules,
    ContactRules,
    LengthRule,
    NewsletterRules,
    SubmissionRules,
)

# RFC 5322 simplified
EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)

EMAIL_MAX_LENGTH = 254
HONEYPOT_FIELD = "honeypot"
INVALID_REQUEST = "Invalid request"


# --- Helpers ---


def honeypot_triggered(payload: Any) -> bool:
    """True when the hidden honeypot field carries anything but whitespace."""
    if not isinstance(payload, Mapping):
        return False
    value = payload.get(HONEYPOT_FIELD)
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return bool(value)


def _require_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise PipelineError.validation(INVALID_REQUEST)
    return payload


def _text(payload: Mapping[str, Any], key: str, label: str, *, required: bool = True) -> str:
    value = payload.get(key)
    if value is None:
        if required:
            raise PipelineError.validation(f"{label} is required")
        return ""
    if not isinstance(value, str):
        raise PipelineError.validation(f"{label} must be text")
    return value.strip()


def _check_length(value: str, rule: LengthRule, label: str) -> str:
    if len(value) < rule.min:
        raise PipelineError.validation(f"{label} must be at least {rule.min} characters")
    if len(value) > rule.max:
        raise PipelineError.validation(f"{label} cannot exceed {rule.max} characters")
    return value


def _check_email(value: str, message: str, max_length: int = EMAIL_MAX_LENGTH) -> str:
    if not EMAIL_REGEX.match(value):
        raise PipelineError.validation(message)
    if len(value) > max_length:
        raise PipelineError.validation(f"Email cannot exceed {max_length} characters")
    return value


def _check_honeypot_empty(payload: Mapping[str, Any]) -> str:
    if honeypot_triggered(payload):
        raise PipelineError.validation(INVALID_REQUEST)
    value = payload.get(HONEYPOT_FIELD)
    return value.strip() if isinstance(value, str) else ""


# --- Validators ---


def validate_comment(payload: Any, rules: CommentRules | None = None) -> CommentRecord:
    rules = rules or CommentRules()
    data = _require_object(payload)

    raw_post_id = data.get("postId")
    if not isinstance(raw_post_id, str):
        raise PipelineError.validation("Invalid post ID")
    try:
        post_id = UUID(raw_post_id.strip())
    except ValueError:
        raise PipelineError.validation("Invalid post ID") from None

    name = _check_length(_text(data, "name", "Name"), rules.name, "Name")
    email = _check_email(_text(data, "email", "Email"), "Invalid email address")
    content = _check_length(_text(data, "content", "Comment"), rules.content, "Comment")
    honeypot = _check_honeypot_empty(data)

    return CommentRecord(
        post_id=post_id,
        name=name,
        email=email,
        content=content,
        honeypot=honeypot,
    )


def validate_newsletter(
    payload: Any, rules: NewsletterRules | None = None
) -> NewsletterRecord:
    rules = rules or NewsletterRules()
    data = _require_object(payload)

    email = _check_email(_text(data, "email", "Email"), "Invalid email address")
    name = _text(data, "name", "Name", required=False)
    if name:
        _check_length(name, rules.name, "Name")
    honeypot = _check_honeypot_empty(data)

    return NewsletterRecord(
        email=email.lower(),
        name=name or None,
        honeypot=honeypot,
    )


def validate_contact(payload: Any, rules: ContactRules | None = None) -> ContactRecord:
    rules = rules or ContactRules()
    data = _require_object(payload)

    name = _check_length(_text(data, "name", "Name"), rules.name, "Name")
    email = _check_email(
        _text(data, "email", "Email"),
        "Please provide a valid email address",
        max_length=rules.email_max,
    )
    message = _check_length(_text(data, "message", "Message"), rules.message, "Message")

    # Passed through untouched apart from trimming
    honeypot = _text(data, HONEYPOT_FIELD, "Honeypot", required=False)
    recaptcha_token = _text(data, "recaptchaToken", "reCAPTCHA token", required=False)

    return ContactRecord(
        name=name,
        email=email,
        message=message,
        honeypot=honeypot,
        recaptcha_token=recaptcha_token or None,
    )


def validate(
    kind: SubmissionKind,
    payload: Any,
    rules: SubmissionRules | None = None,
) -> ValidatedRecord:
    """
    Validate a raw payload for the given submission kind.

    Raises:
        PipelineError: kind VALIDATION with the first failing constraint
    """
    rules = rules or SubmissionRules()

    if kind is SubmissionKind.COMMENT:
        return validate_comment(payload, rules.comment)
    if kind is SubmissionKind.NEWSLETTER:
        return validate_newsletter(payload, rules.newsletter)
    if kind is SubmissionKind.CONTACT:
        return validate_contact(payload, rules.contact)
    raise ValueError(f"Unknown submission kind: {kind}")


def recheck(record: ValidatedRecord, rules: SubmissionRules | None = None) -> ValidatedRecord:
    """
    Re-apply the length rules to a record whose free text was rewritten.

    An optional newsletter name that ends up empty is dropped.

    Raises:
        PipelineError: kind VALIDATION with the first failing constraint
    """
    rules = rules or SubmissionRules()

    if isinstance(record, CommentRecord):
        _check_length(record.name, rules.comment.name, "Name")
        _check_length(record.content, rules.comment.content, "Comment")
    elif isinstance(record, ContactRecord):
        _check_length(record.name, rules.contact.name, "Name")
        _check_length(record.message, rules.contact.message, "Message")
    elif isinstance(record, NewsletterRecord):
        if record.name:
            _check_length(record.name, rules.newsletter.name, "Name")
        elif record.name is not None:
            return dataclasses.replace(record, name=None)
    return record
