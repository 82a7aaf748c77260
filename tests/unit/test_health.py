"""
Unit tests for health check endpoints.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from crosspay.main import app


class TestHealthCheck:
    """Test health check endpoints."""

    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    async def test_health_check_returns_200(self, path):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(path)
            assert response.status_code == 200

    @pytest.mark.parametrize("path", ["/health", "/api/health"])
    async def test_health_check_returns_correct_structure(self, path):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(path)
            data = response.json()

            assert data["success"] is True
            assert data["message"] == "Payment Backend API is running"
            assert "timestamp" in data
            assert data["version"] == "0.1.0"

    async def test_root(self):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/")

            assert response.status_code == 200
            assert response.json() == {"success": True, "message": "Payment Backend API is running"}
