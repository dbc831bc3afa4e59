"""
Dev Email Adapter.

Logs emails instead of sending. Used for local development and tests,
and as the contact notifier when mail settings are absent in dev mode.

Key behaviors:
- Logs email details
- Returns SKIPPED status (not SENT)
- Stores emails in memory for test assertions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from src.core.ports.email import EmailAddress, EmailMessage, EmailResult

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    body_html: str
    body_text: str
    sender: str
    reply_to: str | None
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """
    Dev email adapter that logs instead of sending.

    Implements EmailPort.
    """

    sender: EmailAddress = field(
        default_factory=lambda: EmailAddress("noreply@localhost", "NextGen Site")
    )
    sent_emails: list[SentEmail] = field(default_factory=list)

    log_level: int = logging.INFO
    log_body: bool = False  # Message bodies carry visitor data
    body_preview_length: int = 100

    @property
    def default_sender(self) -> EmailAddress:
        return self.sender

    async def send(self, message: EmailMessage) -> EmailResult:
        message_id = f"dev-{uuid4().hex[:12]}"
        sender = str(message.sender or self.sender)

        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=str(message.recipient),
                subject=message.subject,
                body_html=message.body_html,
                body_text=message.body_text,
                sender=sender,
                reply_to=str(message.reply_to) if message.reply_to else None,
                logged_at=datetime.now(UTC),
            )
        )

        parts = [
            f"EMAIL (dev): To={message.recipient}",
            f"Subject={message.subject}",
            f"From={sender}",
        ]
        if self.log_body and message.body_text:
            preview = message.body_text[: self.body_preview_length]
            if len(message.body_text) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")
        parts.append(f"MessageID={message_id}")
        logger.log(self.log_level, ", ".join(parts))

        return EmailResult.skipped(str(message.recipient), message_id)

    # --- Test Helper Methods ---

    def get_last_email(self) -> SentEmail | None:
        return self.sent_emails[-1] if self.sent_emails else None

    def clear(self) -> None:
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        return len(self.sent_emails)
