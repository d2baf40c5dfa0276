"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        """Test that health endpoint returns 200 OK."""
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        """Test that health endpoint returns expected structure."""
        response = await client.get("/health")
        data = response.json()

        assert "status" in data
        assert "version" in data
        assert "timestamp" in data
        assert "environment" in data

    @pytest.mark.asyncio
    async def test_health_status_is_healthy(self, client: AsyncClient) -> None:
        """Test that health status is 'healthy'."""
        response = await client.get("/health")
        data = response.json()

        assert data["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_health_version_format(self, client: AsyncClient) -> None:
        """Test that version has expected format."""
        response = await client.get("/health")
        data = response.json()

        # Check version follows semver pattern
        assert data["version"] == "1.0.0"


class TestWakeupEndpoint:
    """Tests for the wake-up ping."""

    @pytest.mark.asyncio
    async def test_wakeup_needs_no_auth(self, client: AsyncClient) -> None:
        response = await client.get("/api/wakeup")

        assert response.status_code == 200
        assert response.json()["status"] == "awake"

    @pytest.mark.asyncio
    async def test_responses_carry_security_headers(self, client: AsyncClient) -> None:
        response = await client.get("/api/wakeup")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert "x-request-id" in response.headers


class TestAuthRequired:
    @pytest.mark.asyncio
    async def test_api_rejects_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/club")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"
