"""
Unit Tests for Health Check Endpoints.

Tests the health check functionality including:
- Liveness check (/health)
- Readiness check (/health/ready)
- Database connectivity check
"""

import asyncio

import pytest
from fastapi import HTTPException
from unittest.mock import AsyncMock, MagicMock, patch

from stickyboard.backend.api.health import check_database, health_check, readiness_check


def _factory_with(session):
    """Build a session factory whose sessions are the given mock."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_health_returns_healthy(self):
        assert await health_check() == {"status": "healthy"}


class TestCheckDatabase:
    @pytest.mark.asyncio
    async def test_healthy_on_successful_query(self):
        session = AsyncMock()

        with patch(
            "stickyboard.backend.core.database.get_session_factory",
            return_value=_factory_with(session),
        ):
            result = await check_database()

        assert result["status"] == "healthy"
        assert "latency_ms" in result
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unhealthy_on_error(self):
        session = AsyncMock()
        session.execute.side_effect = Exception("unable to open database file")

        with patch(
            "stickyboard.backend.core.database.get_session_factory",
            return_value=_factory_with(session),
        ):
            result = await check_database()

        assert result == {"status": "unhealthy", "error": "unable to open database file"}


class TestReadinessCheck:
    @pytest.mark.asyncio
    async def test_ready_when_database_healthy(self):
        with patch(
            "stickyboard.backend.api.health.check_database",
            AsyncMock(return_value={"status": "healthy", "latency_ms": 1}),
        ):
            result = await readiness_check()

        assert result["status"] == "healthy"
        assert result["checks"]["database"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_503_when_database_unhealthy(self):
        with patch(
            "stickyboard.backend.api.health.check_database",
            AsyncMock(return_value={"status": "unhealthy", "error": "down"}),
        ):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["checks"]["database"]["error"] == "down"

    @pytest.mark.asyncio
    async def test_503_when_database_check_times_out(self):
        async def hang():
            await asyncio.sleep(10)

        config = MagicMock()
        config.application.observability.ready_timeout_seconds = 0.01

        with patch("stickyboard.backend.api.health.check_database", hang), \
             patch("stickyboard.backend.core.config.get_app_config", return_value=config):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check()

        assert "timed out" in exc_info.value.detail["checks"]["database"]["error"]
