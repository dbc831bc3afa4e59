"""
Contact component models.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.ports.email import EmailAddress

RECAPTCHA_FAILED = "reCAPTCHA validation failed. Please try again."
CONTACT_UNAVAILABLE = "Contact form is temporarily unavailable. Please try again later."
SITE_NAME = "VR NextGen Solutions"


@dataclass(frozen=True)
class ContactSettings:
    """Where contact notifications go and how they are branded."""

    recipient: EmailAddress
    site_name: str = SITE_NAME
    require_captcha: bool = False


@dataclass(frozen=True)
class ContactOutput:
    success: bool
    message_id: str | None = None
