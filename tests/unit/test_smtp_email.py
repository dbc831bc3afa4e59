"""
Unit tests for SMTPEmailAdapter. No network: aiosmtplib calls are patched.
"""

import aiosmtplib
import pytest

from src.adapters.smtp_email import SMTPEmailAdapter
from src.app_shell.config import EmailConfig
from src.core.ports.email import EmailAddress, EmailMessage, EmailStatus


def make_config(port: int = 465, secure: bool = True) -> EmailConfig:
    return EmailConfig(
        host="smtp.example.com",
        port=port,
        secure=secure,
        user="bot@example.com",
        password="secret",
        receive_email="owner@example.com",
    )


def make_message() -> EmailMessage:
    return EmailMessage(
        recipient=EmailAddress("owner@example.com"),
        subject="New Contact: Ada - Site",
        body_html="<p>Hi</p>",
        body_text="Hi",
        reply_to=EmailAddress("ada@example.com", "Ada"),
        headers={"X-Priority": "1"},
    )


class TestBuildMime:
    def test_headers(self) -> None:
        mime = SMTPEmailAdapter(make_config()).build_mime(make_message())

        assert mime["To"] == "owner@example.com"
        assert "VR NextGen Solutions" in mime["From"]
        assert "<bot@example.com>" in mime["From"]
        assert "<ada@example.com>" in mime["Reply-To"]
        assert mime["X-Priority"] == "1"
        assert mime["Message-ID"]

    def test_multipart_alternative(self) -> None:
        mime = SMTPEmailAdapter(make_config()).build_mime(make_message())

        assert mime.is_multipart()
        types = [part.get_content_type() for part in mime.iter_parts()]
        assert types == ["text/plain", "text/html"]


class TestSend:
    @pytest.mark.asyncio
    async def test_implicit_tls(self, monkeypatch) -> None:
        calls = []

        async def fake_send(message, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        result = await SMTPEmailAdapter(make_config()).send(make_message())

        assert result.status is EmailStatus.SENT
        assert result.message_id
        assert calls[0]["use_tls"] is True
        assert calls[0]["start_tls"] is None
        assert calls[0]["hostname"] == "smtp.example.com"

    @pytest.mark.asyncio
    async def test_starttls_on_submission_port(self, monkeypatch) -> None:
        calls = []

        async def fake_send(message, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        await SMTPEmailAdapter(make_config(587, secure=False)).send(make_message())

        assert calls[0]["use_tls"] is False
        assert calls[0]["start_tls"] is True

    @pytest.mark.asyncio
    async def test_smtp_error_reported(self, monkeypatch) -> None:
        async def fake_send(message, **kwargs):
            raise aiosmtplib.SMTPException("auth failed")

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        result = await SMTPEmailAdapter(make_config()).send(make_message())

        assert result.status is EmailStatus.FAILED
        assert not result.delivered
        assert "auth failed" in result.error

    @pytest.mark.asyncio
    async def test_connection_error_reported(self, monkeypatch) -> None:
        async def fake_send(message, **kwargs):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        result = await SMTPEmailAdapter(make_config()).send(make_message())

        assert result.status is EmailStatus.FAILED
