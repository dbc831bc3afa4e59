"""
Environment-driven configuration tests.
"""

import pytest

from src.app_shell.config import (
    ConfigError,
    build_rate_limit_config,
    try_email_config,
    validate_email_config,
)
from src.rules.models import RateLimitRules

MAIL_ENV = {
    "MAIL_HOST": "smtp.example.com",
    "MAIL_PORT": "465",
    "MAIL_USER": "bot@example.com",
    "MAIL_PASS": "secret",
    "CONTACT_RECEIVE_EMAIL": "owner@example.com",
}


class TestRateLimitConfig:
    def test_defaults_from_rules(self) -> None:
        config = build_rate_limit_config(RateLimitRules(), env={})
        assert config.max_submissions == 5
        assert config.window_ms == 600_000

    def test_env_overrides(self) -> None:
        env = {"CONTACT_RATE_LIMIT_MAX": "10", "CONTACT_RATE_LIMIT_WINDOW_MS": "30000"}
        config = build_rate_limit_config(RateLimitRules(), env=env)
        assert config.max_submissions == 10
        assert config.window_ms == 30_000

    def test_bounds_inclusive(self) -> None:
        env = {"CONTACT_RATE_LIMIT_MAX": "100", "CONTACT_RATE_LIMIT_WINDOW_MS": "1000"}
        config = build_rate_limit_config(RateLimitRules(), env=env)
        assert config.max_submissions == 100
        assert config.window_ms == 1000

    @pytest.mark.parametrize("value", ["0", "101", "-1"])
    def test_max_out_of_range(self, value: str) -> None:
        with pytest.raises(ConfigError, match="CONTACT_RATE_LIMIT_MAX"):
            build_rate_limit_config(RateLimitRules(), env={"CONTACT_RATE_LIMIT_MAX": value})

    @pytest.mark.parametrize("value", ["999", "3600001"])
    def test_window_out_of_range(self, value: str) -> None:
        with pytest.raises(ConfigError, match="CONTACT_RATE_LIMIT_WINDOW_MS"):
            build_rate_limit_config(
                RateLimitRules(), env={"CONTACT_RATE_LIMIT_WINDOW_MS": value}
            )

    def test_non_integer(self) -> None:
        with pytest.raises(ConfigError, match="not an integer"):
            build_rate_limit_config(RateLimitRules(), env={"CONTACT_RATE_LIMIT_MAX": "five"})


class TestEmailConfig:
    def test_valid(self) -> None:
        config = validate_email_config(MAIL_ENV)
        assert config.host == "smtp.example.com"
        assert config.port == 465
        assert config.secure is True
        assert config.receive_email == "owner@example.com"

    def test_secure_defaults_off_for_submission_port(self) -> None:
        config = validate_email_config({**MAIL_ENV, "MAIL_PORT": "587"})
        assert config.secure is False

    def test_explicit_secure_flag(self) -> None:
        config = validate_email_config({**MAIL_ENV, "MAIL_PORT": "587", "MAIL_SECURE": "true"})
        assert config.secure is True

    def test_receive_email_falls_back_to_user(self) -> None:
        env = {k: v for k, v in MAIL_ENV.items() if k != "CONTACT_RECEIVE_EMAIL"}
        assert validate_email_config(env).receive_email == "bot@example.com"

    def test_lists_every_missing_variable(self) -> None:
        with pytest.raises(ConfigError) as exc:
            validate_email_config({})
        message = str(exc.value)
        for name in ("MAIL_HOST", "MAIL_USER", "MAIL_PASS", "CONTACT_RECEIVE_EMAIL"):
            assert name in message

    def test_bad_port(self) -> None:
        with pytest.raises(ConfigError, match="MAIL_PORT"):
            validate_email_config({**MAIL_ENV, "MAIL_PORT": "70000"})

    def test_bad_user_format(self) -> None:
        with pytest.raises(ConfigError, match="MAIL_USER"):
            validate_email_config({**MAIL_ENV, "MAIL_USER": "not-an-email"})

    def test_bad_receive_format(self) -> None:
        with pytest.raises(ConfigError, match="CONTACT_RECEIVE_EMAIL"):
            validate_email_config({**MAIL_ENV, "CONTACT_RECEIVE_EMAIL": "nobody"})

    def test_try_returns_none_when_unconfigured(self) -> None:
        assert try_email_config({}) is None
        assert try_email_config(MAIL_ENV) is not None
