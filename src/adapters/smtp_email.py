"""
SMTP Email Adapter.

Delivers messages through an SMTP relay with aiosmtplib. Port 465 uses
implicit TLS; other ports upgrade with STARTTLS when `secure` is False.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage as MimeMessage
from email.utils import make_msgid

import aiosmtplib

from src.app_shell.config import EmailConfig
from src.core.ports.email import EmailAddress, EmailMessage, EmailResult

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "VR NextGen Solutions"
SMTP_TIMEOUT_SECONDS = 30


class SMTPEmailAdapter:
    """Implements EmailPort over SMTP."""

    def __init__(
        self,
        config: EmailConfig,
        sender_name: str = DEFAULT_SENDER_NAME,
        timeout: float = SMTP_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self.sender = EmailAddress(config.user, sender_name)
        self.timeout = timeout

    @property
    def default_sender(self) -> EmailAddress:
        return self.sender

    def build_mime(self, message: EmailMessage) -> MimeMessage:
        mime = MimeMessage()
        mime["From"] = str(message.sender or self.sender)
        mime["To"] = str(message.recipient)
        mime["Subject"] = message.subject
        mime["Message-ID"] = make_msgid()
        if message.reply_to:
            mime["Reply-To"] = str(message.reply_to)
        for name, value in message.headers.items():
            mime[name] = value

        mime.set_content(message.body_text or "")
        if message.body_html:
            mime.add_alternative(message.body_html, subtype="html")
        return mime

    async def send(self, message: EmailMessage) -> EmailResult:
        mime = self.build_mime(message)
        recipient = message.recipient.email

        try:
            await aiosmtplib.send(
                mime,
                hostname=self.config.host,
                port=self.config.port,
                username=self.config.user,
                password=self.config.password,
                use_tls=self.config.secure,
                start_tls=None if self.config.secure else True,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as e:
            logger.error("SMTP delivery to %s failed: %s", recipient, e)
            return EmailResult.failed(recipient, str(e))
        except OSError as e:
            logger.error("SMTP connection to %s:%s failed: %s", self.config.host, self.config.port, e)
            return EmailResult.failed(recipient, str(e))

        return EmailResult.success(recipient, mime["Message-ID"])

    async def verify(self) -> bool:
        """Connect and authenticate without sending anything."""
        smtp = aiosmtplib.SMTP(
            hostname=self.config.host,
            port=self.config.port,
            use_tls=self.config.secure,
            start_tls=None if self.config.secure else True,
            timeout=self.timeout,
        )
        try:
            await smtp.connect()
            await smtp.login(self.config.user, self.config.password)
            await smtp.quit()
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.warning("Contact form health check: SMTP verification failed: %s", e)
            return False
        return True
