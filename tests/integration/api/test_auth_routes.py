"""Integration tests for authentication and health routes."""

import pytest
from fastapi import status


@pytest.mark.integration
class TestAuthMeEndpoint:
    """Test GET /api/v1/auth/me endpoint."""

    def test_get_current_user(self, authenticated_client):
        response = authenticated_client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["username"] == "alice"
        assert data["email"] == "alice@example.com"
        assert data["groups"] == ["team-a", "developers"]
        assert data["auth_provider"] == "oauth-proxy"

    def test_blank_and_repeated_groups_dropped(self, test_client):
        response = test_client.get(
            "/api/v1/auth/me",
            headers={"X-Forwarded-User": "bob", "X-Forwarded-Groups": "a,, b ,a"},
        )

        assert response.json()["groups"] == ["a", "b"]

    def test_unauthenticated(self, test_client):
        response = test_client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_custom_user_header(self, test_client, monkeypatch):
        monkeypatch.setenv("OAUTH_HEADER_USER", "X-Remote-User")

        response = test_client.get("/api/v1/auth/me", headers={"X-Remote-User": "dave"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "dave"


@pytest.mark.integration
class TestHealthEndpoints:
    """Test probe endpoints."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime_seconds"] >= 0

    def test_ready(self, test_client):
        response = test_client.get("/ready")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["checks"] == {"recognized_roles": True}

    def test_not_ready_without_roles(self, test_client, monkeypatch):
        monkeypatch.setenv("RECOGNIZED_ROLES", "")

        response = test_client.get("/ready")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["ready"] is False
