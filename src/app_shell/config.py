"""
Environment-driven configuration checks.

Values are read once at startup and passed into components as explicit
config objects; nothing below the app shell reads the environment.
"""

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass

from src.app_shell.rate_limit import RateLimitConfig
from src.rules.models import RateLimitRules

logger = logging.getLogger(__name__)

_SIMPLE_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

RATE_LIMIT_MAX_BOUNDS = (1, 100)
RATE_LIMIT_WINDOW_BOUNDS_MS = (1000, 3_600_000)


class ConfigError(ValueError):
    """Configuration is missing or out of range."""


@dataclass(frozen=True)
class EmailConfig:
    host: str
    port: int
    secure: bool
    user: str
    password: str
    receive_email: str


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"Invalid {name}: {raw!r} is not an integer") from e


def build_rate_limit_config(
    rules: RateLimitRules,
    env: Mapping[str, str] | None = None,
) -> RateLimitConfig:
    """
    Resolve the submission rate limit from rules.yaml defaults and
    CONTACT_RATE_LIMIT_MAX / CONTACT_RATE_LIMIT_WINDOW_MS overrides.
    """
    env = os.environ if env is None else env

    max_submissions = _int_env(env, "CONTACT_RATE_LIMIT_MAX", rules.max_submissions)
    window_ms = _int_env(env, "CONTACT_RATE_LIMIT_WINDOW_MS", rules.window_ms)

    lo, hi = RATE_LIMIT_MAX_BOUNDS
    if not lo <= max_submissions <= hi:
        raise ConfigError(
            f"Invalid CONTACT_RATE_LIMIT_MAX: {max_submissions}. Must be between {lo} and {hi}."
        )

    lo, hi = RATE_LIMIT_WINDOW_BOUNDS_MS
    if not lo <= window_ms <= hi:
        raise ConfigError(
            f"Invalid CONTACT_RATE_LIMIT_WINDOW_MS: {window_ms}. "
            f"Must be between {lo}ms and {hi}ms."
        )

    return RateLimitConfig(max_submissions=max_submissions, window_ms=window_ms)


def validate_email_config(env: Mapping[str, str] | None = None) -> EmailConfig:
    """
    Validate the SMTP settings used to forward contact messages.

    Raises ConfigError naming every missing variable.
    """
    env = os.environ if env is None else env

    host = env.get("MAIL_HOST", "")
    port = _int_env(env, "MAIL_PORT", 465)
    secure_raw = env.get("MAIL_SECURE")
    secure = secure_raw == "true" if secure_raw is not None else port == 465
    user = env.get("MAIL_USER", "")
    password = env.get("MAIL_PASS", "")
    receive_email = env.get("CONTACT_RECEIVE_EMAIL") or user

    missing = [
        name
        for name, value in (
            ("MAIL_HOST", host),
            ("MAIL_USER", user),
            ("MAIL_PASS", password),
            ("CONTACT_RECEIVE_EMAIL", receive_email),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required email environment variables: {', '.join(missing)}")

    if not 1 <= port <= 65535:
        raise ConfigError(f"Invalid MAIL_PORT: {port}. Must be between 1 and 65535.")

    if not _SIMPLE_EMAIL.match(user):
        raise ConfigError(f"Invalid MAIL_USER email format: {user}")
    if not _SIMPLE_EMAIL.match(receive_email):
        raise ConfigError(f"Invalid CONTACT_RECEIVE_EMAIL format: {receive_email}")

    return EmailConfig(
        host=host,
        port=port,
        secure=secure,
        user=user,
        password=password,
        receive_email=receive_email,
    )


def try_email_config(env: Mapping[str, str] | None = None) -> EmailConfig | None:
    """Like validate_email_config, but logs and returns None when unconfigured."""
    try:
        return validate_email_config(env)
    except ConfigError as e:
        logger.warning("Contact email not configured: %s", e)
        return None
