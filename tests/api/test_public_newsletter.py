"""
Public newsletter subscription API tests.
"""

URL = "/api/blog/subscribe"


class TestSubscribe:
    def test_new_subscriber(self, client, newsletter_repo):
        response = client.post(URL, json={"email": "Reader@Example.com", "name": "Reader"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        stored = newsletter_repo.get_by_email("reader@example.com")
        assert stored.is_active
        assert stored.name == "Reader"

    def test_name_optional(self, client, newsletter_repo):
        assert client.post(URL, json={"email": "quiet@example.com"}).status_code == 200
        assert newsletter_repo.get_by_email("quiet@example.com").name is None

    def test_already_subscribed(self, client):
        client.post(URL, json={"email": "dup@example.com"})

        response = client.post(URL, json={"email": "DUP@example.com"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Already subscribed"}

    def test_reactivates_inactive(self, client, newsletter_repo):
        client.post(URL, json={"email": "back@example.com"})
        sub = newsletter_repo.get_by_email("back@example.com")
        sub.is_active = False
        newsletter_repo.update(sub)

        response = client.post(URL, json={"email": "back@example.com"})

        assert response.status_code == 200
        assert newsletter_repo.get_by_email("back@example.com").is_active
        assert newsletter_repo.count() == 1

    def test_invalid_email(self, client):
        response = client.post(URL, json={"email": "nope"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid email address"

    def test_honeypot(self, client, newsletter_repo):
        response = client.post(URL, json={"email": "bot@example.com", "honeypot": "x"})

        assert response.status_code == 204
        assert newsletter_repo.count() == 0

    def test_wrong_method(self, client):
        response = client.delete(URL)
        assert response.status_code == 405
        assert response.headers["Allow"] == "POST"

    def test_malformed_json(self, client):
        response = client.post(URL, content="{", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_rate_limited(self, client):
        for i in range(3):
            client.post(URL, json={"email": f"r{i}@example.com"})

        response = client.post(URL, json={"email": "late@example.com"})

        assert response.status_code == 429
        assert response.json()["error"] == "Too many attempts. Please try again later."
        assert "Retry-After" in response.headers

    def test_security_headers(self, client):
        response = client.post(URL, json={"email": "h@example.com"})
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
