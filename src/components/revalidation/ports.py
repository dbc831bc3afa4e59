"""
Revalidation component ports.
"""

from __future__ import annotations

from typing import Protocol


class RevalidationPort(Protocol):
    """
    Invalidates cached public pages.

    Implementations raise RevalidationError when the path was not
    invalidated.
    """

    async def revalidate_path(self, path: str) -> None:
        ...
