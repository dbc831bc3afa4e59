"""
Contact component ports.
"""

from __future__ import annotations

from typing import Protocol


class CaptchaVerifierPort(Protocol):
    """Human-verification check for contact submissions."""

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        """Return True when the token proves a human submitted the form."""
        ...
