"""
Contact component unit tests.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from src.adapters.dev_email import DevEmailAdapter
from src.components.contact import (
    RECAPTCHA_FAILED,
    ContactSettings,
    build_contact_email,
    forward_contact,
    verify_captcha,
)
from src.components.validation import ContactRecord
from src.core.errors import ErrorKind, PipelineError
from src.core.ports.email import EmailAddress, EmailMessage, EmailResult, EmailSendError


class FakeCaptcha:
    def __init__(self, passes: bool = True) -> None:
        self.passes = passes
        self.calls: list[tuple[str, str | None]] = []

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        self.calls.append((token, remote_ip))
        return self.passes


class FailingNotifier:
    default_sender = EmailAddress("noreply@example.com")

    async def send(self, message: EmailMessage) -> EmailResult:
        return EmailResult.failed(message.recipient.email, "connection refused")


@pytest.fixture
def settings() -> ContactSettings:
    return ContactSettings(recipient=EmailAddress("owner@example.com"))


def make_record(token: str | None = None, name: str = "Jane Doe") -> ContactRecord:
    return ContactRecord(
        name=name,
        email="jane@example.com",
        message="Hello, I would like a quote.",
        recaptcha_token=token,
    )


class TestBuildEmail:
    def test_subject_and_reply_to(self, settings: ContactSettings) -> None:
        msg = build_contact_email(make_record(), settings, now=datetime(2025, 3, 1, tzinfo=UTC))

        assert msg.subject == "New Contact: Jane Doe - VR NextGen Solutions"
        assert msg.recipient.email == "owner@example.com"
        assert msg.reply_to is not None
        assert msg.reply_to.email == "jane@example.com"
        assert msg.headers["X-Priority"] == "1"

    def test_bodies_carry_message(self, settings: ContactSettings) -> None:
        msg = build_contact_email(make_record(), settings)
        assert "Hello, I would like a quote." in msg.body_text
        assert "Name: Jane Doe" in msg.body_text
        assert "Hello, I would like a quote." in msg.body_html

    def test_html_is_escaped(self, settings: ContactSettings) -> None:
        msg = build_contact_email(make_record(name="Tom & Jerry"), settings)
        assert "Tom &amp; Jerry" in msg.body_html


class TestCaptcha:
    @pytest.mark.asyncio
    async def test_no_verifier_skips_check(self) -> None:
        await verify_captcha(make_record(token=None), None)

    @pytest.mark.asyncio
    async def test_missing_token_rejected(self) -> None:
        with pytest.raises(PipelineError) as exc_info:
            await verify_captcha(make_record(token=None), FakeCaptcha())
        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert exc_info.value.message == RECAPTCHA_FAILED

    @pytest.mark.asyncio
    async def test_failed_token_rejected(self) -> None:
        with pytest.raises(PipelineError):
            await verify_captcha(make_record(token="bad"), FakeCaptcha(passes=False))

    @pytest.mark.asyncio
    async def test_ip_forwarded_to_verifier(self) -> None:
        captcha = FakeCaptcha()
        await verify_captcha(make_record(token="tok"), captcha, "203.0.113.9")
        assert captcha.calls == [("tok", "203.0.113.9")]


class TestForwardContact:
    @pytest.mark.asyncio
    async def test_delivers_through_notifier(self, settings: ContactSettings) -> None:
        notifier = DevEmailAdapter()

        out = await forward_contact(make_record(), notifier=notifier, settings=settings)

        assert out.success is True
        assert notifier.email_count == 1
        sent = notifier.get_last_email()
        assert sent is not None
        assert sent.recipient == "owner@example.com"
        assert sent.reply_to == '"Jane Doe" <jane@example.com>'

    @pytest.mark.asyncio
    async def test_captcha_failure_sends_nothing(self, settings: ContactSettings) -> None:
        notifier = DevEmailAdapter()

        with pytest.raises(PipelineError):
            await forward_contact(
                make_record(token="bad"),
                notifier=notifier,
                settings=settings,
                captcha=FakeCaptcha(passes=False),
            )

        assert notifier.email_count == 0

    @pytest.mark.asyncio
    async def test_delivery_failure_raises(self, settings: ContactSettings) -> None:
        with pytest.raises(EmailSendError):
            await forward_contact(make_record(), notifier=FailingNotifier(), settings=settings)
