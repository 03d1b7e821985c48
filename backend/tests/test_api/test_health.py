"""Tests for health check endpoint."""

import pytest
from fastapi.testclient import TestClient


class TestHealthEndpoint:
    """Test health check endpoint."""

    @pytest.fixture
    def client(self):
        """Create test client."""
        from snippet_store.main import app

        with TestClient(app) as client:
            yield client

    def test_health_check_returns_200(self, client):
        """Health endpoint returns 200 OK."""
        response = client.get("/health")

        assert response.status_code == 200

    def test_health_check_response_body(self, client):
        """Health endpoint returns expected body."""
        response = client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"
        assert "version" in data
        assert "snippets_configured" in data
