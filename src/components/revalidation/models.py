"""
Revalidation component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class RevalidationError(Exception):
    """A path could not be revalidated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to revalidate {path}: {reason}")


@dataclass(frozen=True)
class RevalidateInput:
    slug: str | None = None


@dataclass
class RevalidationResult:
    """Result of a revalidation operation."""

    success: bool
    paths_revalidated: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
