"""
Health endpoint tests.
"""

import pytest

URL = "/api/health/contact"

MAIL_ENV = {
    "MAIL_HOST": "smtp.example.com",
    "MAIL_PORT": "465",
    "MAIL_USER": "bot@example.com",
    "MAIL_PASS": "secret",
    "CONTACT_RECEIVE_EMAIL": "owner@example.com",
}


@pytest.fixture
def mail_env(monkeypatch):
    for name, value in MAIL_ENV.items():
        monkeypatch.setenv(name, value)


@pytest.fixture
def no_mail_env(monkeypatch):
    for name in MAIL_ENV:
        monkeypatch.delenv(name, raising=False)


def test_service_health(client):
    assert client.get("/health").json() == {"status": "ok", "service": "api"}


def test_contact_healthy(client, mail_env):
    response = client.get(URL)

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "email": {"configured": True, "verified": True},
    }


def test_contact_smtp_unreachable(client, mail_env, smtp_verified):
    smtp_verified[0] = False

    response = client.get(URL)

    assert response.status_code == 200
    assert response.json()["email"] == {"configured": True, "verified": False}


def test_contact_unconfigured(client, no_mail_env):
    response = client.get(URL)

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["email"] == {"configured": False}
    assert "MAIL_HOST" in body["error"]


def test_contact_wrong_method(client):
    response = client.post(URL)

    assert response.status_code == 405
    assert response.headers["Allow"] == "GET"
    assert response.json()["status"] == "unhealthy"
