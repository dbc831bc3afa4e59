from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.auth.crypto import JWTIdentityAdapter
from src.adapters.dev_email import DevEmailAdapter
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite_db import (
    SQLiteAdminRepo,
    SQLiteCommentRepo,
    SQLiteNewsletterSubscriberRepo,
)
from src.api import deps
from src.api.main import app
from src.api.routes import health
from src.app_shell.rate_limit import RateLimitConfig, RateLimiter
from src.components.contact import ContactSettings
from src.components.revalidation import StubRevalidationAdapter
from src.core.ports.email import EmailAddress
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent
ADMIN_EMAIL = "admin@example.com"
TEST_SECRET = "test-secret"


class FakeTime:
    """Controllable clock for the rate limiter."""

    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def rules() -> Rules:
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def db_path(tmp_path) -> str:
    """Migrated SQLite database in a temp dir."""
    path = str(tmp_path / "site.db")
    SQLiteMigrator(path, str(PROJECT_ROOT / "migrations")).run_migrations()
    return path


@pytest.fixture
def comment_repo(db_path: str) -> SQLiteCommentRepo:
    return SQLiteCommentRepo(db_path)


@pytest.fixture
def newsletter_repo(db_path: str) -> SQLiteNewsletterSubscriberRepo:
    return SQLiteNewsletterSubscriberRepo(db_path)


@pytest.fixture
def admin_repo(db_path: str) -> SQLiteAdminRepo:
    repo = SQLiteAdminRepo(db_path)
    repo.add(ADMIN_EMAIL)
    return repo


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def limiter(fake_time: FakeTime) -> RateLimiter:
    return RateLimiter(RateLimitConfig(max_submissions=3, window_ms=60_000), fake_time)


@pytest.fixture
def email_adapter() -> DevEmailAdapter:
    return DevEmailAdapter()


@pytest.fixture
def revalidation_port() -> StubRevalidationAdapter:
    return StubRevalidationAdapter()


@pytest.fixture
def identity() -> JWTIdentityAdapter:
    return JWTIdentityAdapter(TEST_SECRET)


@pytest.fixture
def admin_headers(identity: JWTIdentityAdapter, admin_repo: SQLiteAdminRepo) -> dict[str, str]:
    return {"Authorization": f"Bearer {identity.create_token(ADMIN_EMAIL)}"}


@pytest.fixture
def smtp_verified() -> list[bool]:
    """Mutable result for the overridden SMTP check."""
    return [True]


@pytest.fixture
def client(
    rules: Rules,
    comment_repo: SQLiteCommentRepo,
    newsletter_repo: SQLiteNewsletterSubscriberRepo,
    admin_repo: SQLiteAdminRepo,
    limiter: RateLimiter,
    email_adapter: DevEmailAdapter,
    revalidation_port: StubRevalidationAdapter,
    identity: JWTIdentityAdapter,
    smtp_verified: list[bool],
) -> Iterator[TestClient]:
    """TestClient with every external dependency replaced."""

    async def fake_verify(config) -> bool:
        return smtp_verified[0]

    overrides = {
        deps.get_rules: lambda: rules,
        deps.get_comment_repo: lambda: comment_repo,
        deps.get_newsletter_repo: lambda: newsletter_repo,
        deps.get_admin_repo: lambda: admin_repo,
        deps.get_rate_limiter: lambda: limiter,
        deps.get_contact_notifier: lambda: email_adapter,
        deps.get_contact_settings: lambda: ContactSettings(
            recipient=EmailAddress("owner@example.com")
        ),
        deps.get_captcha_verifier: lambda: None,
        deps.get_revalidation_port: lambda: revalidation_port,
        deps.get_identity_adapter: lambda: identity,
        health.get_smtp_verifier: lambda: fake_verify,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
