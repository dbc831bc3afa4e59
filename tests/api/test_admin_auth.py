"""
Admin verification and revalidation API tests.
"""

URL = "/api/admin/auth/verify"
REVALIDATE_URL = "/api/revalidate"


class TestVerifyAdmin:
    def test_admin_email(self, client, admin_repo):
        response = client.post(URL, json={"email": "Admin@Example.com "})

        assert response.status_code == 200
        assert response.json() == {"isAdmin": True}

    def test_non_admin_email(self, client, admin_repo):
        response = client.post(URL, json={"email": "visitor@example.com"})
        assert response.json() == {"isAdmin": False}

    def test_email_required(self, client):
        for body in ({}, {"email": ""}, {"email": 42}):
            response = client.post(URL, json=body)
            assert response.status_code == 400
            assert response.json() == {"isAdmin": False, "error": "Email is required"}

    def test_malformed_json(self, client):
        response = client.post(URL, content="{", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["isAdmin"] is False

    def test_wrong_method(self, client):
        response = client.get(URL)
        assert response.status_code == 405
        assert response.json() == {"isAdmin": False, "error": "Method not allowed"}

    def test_lookup_failure(self, client, admin_repo, monkeypatch):
        def boom(email):
            raise RuntimeError("db locked")

        monkeypatch.setattr(admin_repo, "get_by_email", boom)

        response = client.post(URL, json={"email": "admin@example.com"})

        assert response.status_code == 500
        assert response.json() == {"isAdmin": False, "error": "Verification failed"}


class TestRevalidate:
    def test_listing_only(self, client, admin_headers, revalidation_port):
        response = client.post(REVALIDATE_URL, json={}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "revalidated": True}
        assert revalidation_port.revalidated_paths == ["/nextgen-blog"]

    def test_listing_and_post(self, client, admin_headers, revalidation_port):
        client.post(REVALIDATE_URL, json={"slug": "hello-world"}, headers=admin_headers)

        assert revalidation_port.revalidated_paths == [
            "/nextgen-blog",
            "/nextgen-blog/hello-world",
        ]

    def test_empty_body_allowed(self, client, admin_headers, revalidation_port):
        response = client.post(REVALIDATE_URL, headers=admin_headers)
        assert response.status_code == 200
        assert revalidation_port.revalidated_paths == ["/nextgen-blog"]

    def test_malformed_body_refreshes_listing(self, client, admin_headers, revalidation_port):
        response = client.post(
            REVALIDATE_URL,
            content="{not json",
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert revalidation_port.revalidated_paths == ["/nextgen-blog"]

    def test_post_failure_still_succeeds(self, client, admin_headers, revalidation_port):
        revalidation_port.failing_paths.add("/nextgen-blog/broken")

        response = client.post(REVALIDATE_URL, json={"slug": "broken"}, headers=admin_headers)

        assert response.status_code == 200
        assert revalidation_port.revalidated_paths == ["/nextgen-blog"]

    def test_listing_failure(self, client, admin_headers, revalidation_port):
        revalidation_port.failing_paths.add("/nextgen-blog")

        response = client.post(REVALIDATE_URL, json={}, headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Revalidation failed"}

    def test_unauthorized(self, client, revalidation_port):
        response = client.post(REVALIDATE_URL, json={})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert revalidation_port.revalidated_paths == []

    def test_wrong_method(self, client, admin_headers):
        response = client.get(REVALIDATE_URL, headers=admin_headers)
        assert response.status_code == 405
        assert response.headers["Allow"] == "POST"
