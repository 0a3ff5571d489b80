"""Tests for health check endpoints."""

import pytest
from fastapi.testclient import TestClient

from api import app
from modules.access.widgets import WIDGET_REGISTRY


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

    def test_readiness_check(self):
        """Readiness endpoint should report the loaded widget registry."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] in ("configured", "in-memory")
        assert data["widgets"] == len(WIDGET_REGISTRY)

    def test_health_response_structure(self):
        """Health response should have correct structure."""
        data = client.get("/api/health").json()
        assert set(data.keys()) == {"status", "version"}

    def test_readiness_response_structure(self):
        """Readiness response should have correct structure."""
        data = client.get("/api/ready").json()
        assert set(data.keys()) == {"status", "database", "widgets"}
