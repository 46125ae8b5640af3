"""Tests for health check endpoints."""

from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

import main
from core.config import Settings
from infrastructure.database.session import Database
from main import create_app


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_200(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_health_returns_correct_structure(self, client: AsyncClient) -> None:
        data = (await client.get("/health")).json()

        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data
        assert "environment" in data

    @pytest.mark.asyncio
    async def test_detailed_health_checks_database(self, client: AsyncClient) -> None:
        data = (await client.get("/health/detailed")).json()

        assert data["status"] == "healthy"
        assert data["database"] == "healthy"

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert "x-request-id" in response.headers


class TestAppSettings:
    """The app reads the settings it was created with, not the process defaults."""

    @staticmethod
    def _staging_settings() -> Settings:
        return Settings(
            _env_file=None,  # type: ignore[call-arg]
            database_url="sqlite+aiosqlite:///:memory:",
            app_env="staging",
        )

    @pytest.mark.asyncio
    async def test_health_reports_app_environment(self, database: Database) -> None:
        app = create_app(app_settings=self._staging_settings(), database=database)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            data = (await c.get("/health")).json()

        assert data["environment"] == "staging"

    @pytest.mark.asyncio
    async def test_lifespan_logs_app_environment(
        self, database: Database, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        app = create_app(app_settings=self._staging_settings(), database=database)
        mock_logger = MagicMock()
        monkeypatch.setattr(main, "logger", mock_logger)

        async with app.router.lifespan_context(app):
            pass

        mock_logger.info.assert_any_call("application_started", environment="staging")
