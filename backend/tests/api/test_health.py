"""Tests for health check endpoints."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from api.app import create_app
from shared.config import Settings


client = TestClient(create_app())


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"

    def test_health_response_structure(self):
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    @patch("api.routes.health.get_settings")
    def test_ready_when_secrets_configured(self, mock_settings):
        mock_settings.return_value = Settings(
            jwt_access_secret="a" * 32,
            jwt_refresh_secret="b" * 32,
            user_store="memory",
        )

        response = client.get("/api/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ready", "user_store": "memory", "tokens": "configured"}

    @patch("api.routes.health.get_settings")
    def test_not_ready_without_secrets(self, mock_settings):
        mock_settings.return_value = Settings(jwt_access_secret="", jwt_refresh_secret="")

        response = client.get("/api/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["tokens"] == "missing"
