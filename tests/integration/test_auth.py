"""Integration tests for SimpleJWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - Protected DRF endpoints return 401 without or with a bad token.
  - Tokens from the token endpoint authenticate API calls.
"""

import pytest

pytestmark = pytest.mark.integration

PASSWORD = "Kava-Lounge-2024!"


class TestPublicEndpoints:
    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_invite_validation_is_public(self, api_client, welcome_invite):
        response = api_client.post(
            "/api/v1/invites/validate/", {"code": "WELCOME2024"}, format="json"
        )
        assert response.status_code == 200


class TestProtectedEndpoints:
    """All other DRF endpoints require a valid JWT (Fail Closed)."""

    @pytest.mark.parametrize(
        "path", ["/api/v1/me/profile/", "/api/v1/products/", "/api/v1/orders/"]
    )
    def test_no_token_returns_401(self, api_client, path):
        response = api_client.get(path)
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get("/api/v1/me/profile/")
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.get("/api/v1/me/profile/")
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get("/api/v1/me/profile/")
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")


class TestTokenFlow:
    def test_obtain_token_and_call_api(self, api_client, customer):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "jane@example.com", "password": PASSWORD},
            format="json",
        )
        assert response.status_code == 200
        access = response.json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        profile = api_client.get("/api/v1/me/profile/")

        assert profile.status_code == 200
        assert profile.json()["email"] == "jane@example.com"

    def test_wrong_password(self, api_client, customer):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": "jane@example.com", "password": "wrong-password"},
            format="json",
        )
        assert response.status_code == 401
