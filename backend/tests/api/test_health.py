"""Tests for health check endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


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

    def test_health_needs_no_session(self):
        response = TestClient(app).get("/api/health")
        assert response.status_code == 200

    def test_readiness_check(self):
        """Readiness answers 200 once the database client exists."""
        with patch("api.routes.health.get_supabase_client", return_value=MagicMock()):
            response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "database": "connected"}

    def test_readiness_without_database(self):
        with patch(
            "api.routes.health.get_supabase_client",
            side_effect=ValueError("SUPABASE_URL is not set"),
        ):
            response = client.get("/api/ready")
        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "database": "unavailable"}
