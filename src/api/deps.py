import logging
import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Header

from src.adapters.auth.crypto import JWTIdentityAdapter
from src.adapters.dev_email import DevEmailAdapter
from src.adapters.recaptcha import RecaptchaVerifier
from src.adapters.smtp_email import SMTPEmailAdapter
from src.adapters.sqlite_db import (
    SQLiteAdminRepo,
    SQLiteCommentRepo,
    SQLiteNewsletterSubscriberRepo,
)
from src.app_shell.config import EmailConfig, build_rate_limit_config, try_email_config
from src.app_shell.rate_limit import RateLimiter
from src.components.admin_access import AdminIdentity, authorize_admin
from src.components.contact import ContactSettings
from src.components.revalidation import (
    RevalidationPort,
    StubRevalidationAdapter,
    WebhookRevalidationAdapter,
)
from src.core.ports.email import EmailAddress, EmailPort
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)

DEV_CONTACT_RECIPIENT = "contact@localhost"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("SITE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "site.db")
        self.migrations_dir = str(self.base_dir / "migrations")
        self.rules_path = Path(os.environ.get("SITE_RULES_PATH", self.base_dir / "rules.yaml"))
        self.secret_key = os.environ.get("SITE_SECRET_KEY", "dev-secret-unsafe")
        self.env = os.environ.get("SITE_ENV", "dev")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
        self.recaptcha_secret = os.environ.get("RECAPTCHA_SECRET") or None
        self.revalidate_webhook_url = os.environ.get("REVALIDATE_WEBHOOK_URL") or None
        self.revalidate_secret = os.environ.get("REVALIDATE_SECRET", "")
        self.cors_origins = [
            o.strip()
            for o in os.environ.get(
                "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
            ).split(",")
            if o.strip()
        ]
        purge = os.environ.get("RATE_LIMIT_PURGE_INTERVAL_SECONDS")
        self.purge_interval_seconds = float(purge) if purge else None

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# --- Repos ---
def get_comment_repo(settings: Settings = Depends(get_settings)) -> SQLiteCommentRepo:
    return SQLiteCommentRepo(settings.db_path)


def get_newsletter_repo(
    settings: Settings = Depends(get_settings),
) -> SQLiteNewsletterSubscriberRepo:
    return SQLiteNewsletterSubscriberRepo(settings.db_path)


def get_admin_repo(settings: Settings = Depends(get_settings)) -> SQLiteAdminRepo:
    return SQLiteAdminRepo(settings.db_path)


# --- Rate limiter singleton ---
_rate_limiter_instance: RateLimiter | None = None


def build_rate_limiter(rules: Rules) -> RateLimiter:
    """Create the process-wide limiter. Raises ConfigError on bad env overrides."""
    global _rate_limiter_instance
    _rate_limiter_instance = RateLimiter(build_rate_limit_config(rules.rate_limits))
    return _rate_limiter_instance


def get_rate_limiter() -> RateLimiter:
    """Get rate limiter singleton."""
    global _rate_limiter_instance
    if _rate_limiter_instance is None:
        _rate_limiter_instance = RateLimiter()
    return _rate_limiter_instance


# --- Admin auth ---
def get_identity_adapter(settings: Settings = Depends(get_settings)) -> JWTIdentityAdapter:
    return JWTIdentityAdapter(settings.secret_key)


def require_admin(
    authorization: str | None = Header(default=None),
    identity: JWTIdentityAdapter = Depends(get_identity_adapter),
    admin_repo: SQLiteAdminRepo = Depends(get_admin_repo),
) -> AdminIdentity:
    """Raises PipelineError(UNAUTHORIZED); the app-level handler renders it."""
    return authorize_admin(authorization, identity, admin_repo)


# --- Contact ---
@lru_cache
def get_email_config() -> EmailConfig | None:
    return try_email_config()


_dev_email_instance: DevEmailAdapter | None = None


def get_dev_email_adapter() -> DevEmailAdapter:
    global _dev_email_instance
    if _dev_email_instance is None:
        _dev_email_instance = DevEmailAdapter()
    return _dev_email_instance


def get_contact_notifier(settings: Settings = Depends(get_settings)) -> EmailPort | None:
    """SMTP when mail is configured, the logging adapter in dev, otherwise None."""
    config = get_email_config()
    if config is not None:
        return SMTPEmailAdapter(config)
    if settings.is_dev:
        return get_dev_email_adapter()
    return None


def get_contact_settings() -> ContactSettings:
    config = get_email_config()
    recipient = config.receive_email if config is not None else DEV_CONTACT_RECIPIENT
    return ContactSettings(recipient=EmailAddress(recipient))


def get_captcha_verifier(settings: Settings = Depends(get_settings)) -> RecaptchaVerifier | None:
    if not settings.recaptcha_secret:
        return None
    return RecaptchaVerifier(settings.recaptcha_secret)


# --- Revalidation singleton ---
_revalidation_instance: RevalidationPort | None = None


def get_revalidation_port(settings: Settings = Depends(get_settings)) -> RevalidationPort:
    """Webhook adapter when REVALIDATE_WEBHOOK_URL is set, else the recording stub."""
    global _revalidation_instance
    if _revalidation_instance is None:
        if settings.revalidate_webhook_url:
            _revalidation_instance = WebhookRevalidationAdapter(
                settings.revalidate_webhook_url, settings.revalidate_secret
            )
        else:
            logger.info("REVALIDATE_WEBHOOK_URL not set; using stub revalidation")
            _revalidation_instance = StubRevalidationAdapter()
    return _revalidation_instance
