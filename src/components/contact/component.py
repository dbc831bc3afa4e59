"""
Contact component.

Verifies the optional captcha token and forwards a validated contact
message to the site owner through the email port.
"""

from __future__ import annotations

import html
from datetime import UTC, datetime

from src.components.contact.models import RECAPTCHA_FAILED, ContactOutput, ContactSettings
from src.components.contact.ports import CaptchaVerifierPort
from src.components.validation import ContactRecord
from src.core.errors import PipelineError
from src.core.ports.email import EmailAddress, EmailMessage, EmailPort, EmailSendError

PRIORITY_HEADERS = {
    "X-Priority": "1",
    "X-MSMail-Priority": "High",
    "Importance": "high",
}


# --- Pure Functions ---


def _received_on(now: datetime) -> str:
    return now.strftime("%b %d, %Y, %I:%M %p")


def render_text(record: ContactRecord, site_name: str, now: datetime) -> str:
    return (
        "New Contact Form Submission\n"
        "\n"
        f"Name: {record.name}\n"
        f"Email: {record.email}\n"
        "\n"
        "Message:\n"
        f"{record.message}\n"
        "\n"
        "---\n"
        f"This email was sent via the {site_name} contact form.\n"
        f"Received on {_received_on(now)}"
    )


def render_html(record: ContactRecord, site_name: str, now: datetime) -> str:
    name = html.escape(record.name)
    email = html.escape(record.email)
    message = html.escape(record.message)
    site = html.escape(site_name)
    return f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>New Contact Form Submission</title></head>
<body style="font-family: Arial, sans-serif; background-color: #f5f5f5;">
  <h1 style="color: #FFD700;">{site}</h1>
  <p>You have received a new message through the contact form:</p>
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
  <p><strong>Message:</strong></p>
  <p style="white-space: pre-line;">{message}</p>
  <hr>
  <p style="font-size: 12px;">Received on {_received_on(now)}</p>
  <p style="font-size: 12px;">This email was sent via the {site} contact form.</p>
  <p style="font-size: 12px;">&copy; {now.year} {site}. All rights reserved.</p>
</body>
</html>
"""


def build_contact_email(
    record: ContactRecord,
    settings: ContactSettings,
    now: datetime | None = None,
) -> EmailMessage:
    """Build the owner notification. Replies go straight to the visitor."""
    now = now or datetime.now(UTC)
    return EmailMessage(
        recipient=settings.recipient,
        subject=f"New Contact: {record.name} - {settings.site_name}",
        body_html=render_html(record, settings.site_name, now),
        body_text=render_text(record, settings.site_name, now),
        reply_to=EmailAddress(record.email, record.name),
        headers=dict(PRIORITY_HEADERS),
    )


# --- Async Handlers ---


async def verify_captcha(
    record: ContactRecord,
    captcha: CaptchaVerifierPort | None,
    client_ip: str | None = None,
) -> None:
    """
    Raise a validation error when captcha is enforced and the token is
    missing or rejected. No verifier means no check.
    """
    if captcha is None:
        return
    if not record.recaptcha_token:
        raise PipelineError.validation(RECAPTCHA_FAILED)
    if not await captcha.verify(record.recaptcha_token, client_ip):
        raise PipelineError.validation(RECAPTCHA_FAILED)


async def forward_contact(
    record: ContactRecord,
    *,
    notifier: EmailPort,
    settings: ContactSettings,
    captcha: CaptchaVerifierPort | None = None,
    client_ip: str | None = None,
) -> ContactOutput:
    """
    Verify and deliver a contact message.

    Raises:
        PipelineError: VALIDATION when captcha verification fails
        EmailSendError: when the notifier reports a failed delivery
    """
    await verify_captcha(record, captcha, client_ip)

    result = await notifier.send(build_contact_email(record, settings))
    if not result.delivered:
        raise EmailSendError(result.recipient, result.error or "unknown error")

    return ContactOutput(success=True, message_id=result.message_id)
