"""
Free-text sanitization for user submissions.

Names, comments and contact messages are stored as plain text. Anything that
could execute when later rendered as HTML is removed; ordinary punctuation,
ampersands, quotes and non-ASCII text are left alone.
"""

import dataclasses
import re
from typing import Any, TypeVar

T = TypeVar("T")

# Elements whose bodies are code or embedded documents, dropped with their content.
_DANGEROUS_BLOCKS = re.compile(
    r"<(script|style|iframe|object|embed)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_DANGEROUS_OPEN = re.compile(r"<(script|style|iframe|object|embed)\b[^>]*/?>", re.IGNORECASE)
_TAG = re.compile(r"</?[a-zA-Z!][^<>]*>")
_PSEUDO_PROTOCOL = re.compile(r"(java|vb)script\s*:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE)
_ANGLE = re.compile(r"[<>]")


def sanitize_text(value: str) -> str:
    """Strip markup, script bodies, pseudo-protocols and inline event handlers."""
    if not value:
        return ""

    cleaned = _DANGEROUS_BLOCKS.sub("", value)
    cleaned = _DANGEROUS_OPEN.sub("", cleaned)
    cleaned = _TAG.sub("", cleaned)
    cleaned = _ANGLE.sub("", cleaned)

    # Removing one match can splice a new one together ("jajavascript:vascript:")
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _PSEUDO_PROTOCOL.sub("", cleaned)
        cleaned = _EVENT_HANDLER.sub("", cleaned)

    return cleaned.strip()


def sanitize_fields(record: T, fields: tuple[str, ...]) -> T:
    """Return a copy of a dataclass record with the named text fields sanitized."""
    changes: dict[str, Any] = {}
    for name in fields:
        value = getattr(record, name)
        if isinstance(value, str):
            changes[name] = sanitize_text(value)
    return dataclasses.replace(record, **changes)  # type: ignore[type-var]
