"""
Pipeline error taxonomy.

A single tagged error type is raised by components and matched at the HTTP
boundary. The kind decides the status code; the message is always safe to
show to the caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Classified failure kinds for public and admin flows."""

    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    UNEXPECTED = "unexpected"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
    ErrorKind.UNSUPPORTED_MEDIA_TYPE: 415,
    ErrorKind.ALREADY_EXISTS: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.UNEXPECTED: 500,
}


class PipelineError(Exception):
    """Classified, caller-safe failure."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        retry_after_ms: int | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.retry_after_ms = retry_after_ms
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def retry_after_seconds(self) -> int | None:
        if self.retry_after_ms is None:
            return None
        # Round up so clients never retry a moment too early
        return max(1, -(-self.retry_after_ms // 1000))

    @classmethod
    def validation(cls, message: str) -> PipelineError:
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def unauthorized(cls) -> PipelineError:
        return cls(ErrorKind.UNAUTHORIZED, "Unauthorized")

    def __repr__(self) -> str:
        return f"PipelineError(kind={self.kind.value!r}, message={self.message!r})"


class DuplicateKeyError(Exception):
    """A repository insert collided with a unique constraint."""

    def __init__(self, table: str, key: str) -> None:
        self.table = table
        self.key = key
        super().__init__(f"Duplicate key in {table}: {key}")
