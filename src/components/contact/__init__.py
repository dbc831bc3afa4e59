"""
Contact component.

Captcha check and owner notification for contact-form messages.
"""

from src.components.contact.component import (
    build_contact_email,
    forward_contact,
    render_html,
    render_text,
    verify_captcha,
)
from src.components.contact.models import (
    CONTACT_UNAVAILABLE,
    RECAPTCHA_FAILED,
    ContactOutput,
    ContactSettings,
)
from src.components.contact.ports import CaptchaVerifierPort

__all__ = [
    "forward_contact",
    "verify_captcha",
    "build_contact_email",
    "render_html",
    "render_text",
    "ContactSettings",
    "ContactOutput",
    "CaptchaVerifierPort",
    "RECAPTCHA_FAILED",
    "CONTACT_UNAVAILABLE",
]
