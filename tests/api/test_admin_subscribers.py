"""
Admin newsletter subscriber API tests.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from src.components.newsletter import NewsletterSubscriber

URL = "/api/admin/subscribers"


def seed(repo, emails: list[str]) -> list[NewsletterSubscriber]:
    base = datetime(2025, 2, 1, tzinfo=UTC)
    subs = []
    for i, email in enumerate(emails):
        at = base + timedelta(minutes=i)
        sub = NewsletterSubscriber(
            id=uuid4(),
            email=email,
            name=None,
            is_active=True,
            subscribed_at=at,
            updated_at=at,
        )
        repo.insert(sub)
        subs.append(sub)
    return subs


class TestListSubscribers:
    def test_requires_admin(self, client):
        assert client.get(URL).status_code == 401

    def test_list(self, client, admin_headers, newsletter_repo):
        seed(newsletter_repo, ["a@example.com", "b@example.com"])

        body = client.get(URL, headers=admin_headers).json()

        assert body["success"] is True
        assert body["total"] == 2
        assert body["pageSize"] == 20
        assert body["totalPages"] == 1
        assert [s["email"] for s in body["data"]] == ["b@example.com", "a@example.com"]

    def test_search(self, client, admin_headers, newsletter_repo):
        seed(newsletter_repo, ["alice@example.com", "bob@example.com"])

        body = client.get(URL, params={"search": " alice "}, headers=admin_headers).json()

        assert body["total"] == 1
        assert body["data"][0]["email"] == "alice@example.com"

    def test_paging(self, client, admin_headers, newsletter_repo):
        seed(newsletter_repo, [f"s{i}@example.com" for i in range(5)])

        body = client.get(
            URL, params={"page": 3, "pageSize": 2}, headers=admin_headers
        ).json()

        assert [s["email"] for s in body["data"]] == ["s0@example.com"]
        assert body["totalPages"] == 3

    def test_bad_page(self, client, admin_headers):
        assert client.get(URL, params={"page": 0}, headers=admin_headers).status_code == 400


class TestDeleteSubscriber:
    def test_delete_by_query(self, client, admin_headers, newsletter_repo):
        (sub,) = seed(newsletter_repo, ["gone@example.com"])

        response = client.delete(URL, params={"id": str(sub.id)}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert newsletter_repo.get_by_id(sub.id) is None

    def test_delete_by_body(self, client, admin_headers, newsletter_repo):
        (sub,) = seed(newsletter_repo, ["gone@example.com"])

        response = client.request(
            "DELETE", URL, json={"id": str(sub.id)}, headers=admin_headers
        )

        assert response.status_code == 200
        assert newsletter_repo.count() == 0

    def test_missing_id(self, client, admin_headers):
        response = client.delete(URL, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing subscriber ID"

    def test_invalid_id(self, client, admin_headers):
        response = client.delete(URL, params={"id": "123"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid subscriber ID"

    def test_not_found(self, client, admin_headers):
        response = client.delete(URL, params={"id": str(uuid4())}, headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Subscriber not found"}

    def test_wrong_method(self, client, admin_headers):
        response = client.put(URL, json={}, headers=admin_headers)
        assert response.status_code == 405
        assert response.headers["Allow"] == "GET, DELETE"
