"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

import pytest
from httpx import AsyncClient


class TestRequestIdHeader:
    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_provided_request_id(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "my-request-12345"})

        assert response.headers["X-Request-ID"] == "my-request-12345"

    @pytest.mark.asyncio
    async def test_request_id_in_response_metadata(self, client: AsyncClient):
        response = await client.get("/api/v1/stickies", headers={"X-Request-ID": "meta-1"})

        assert response.json()["metadata"]["request_id"] == "meta-1"

    @pytest.mark.asyncio
    async def test_request_id_in_error_metadata(self, client: AsyncClient):
        response = await client.get("/api/v1/stickies/missing", headers={"X-Request-ID": "err-1"})

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == "err-1"


class TestResponseTimeHeader:
    @pytest.mark.asyncio
    async def test_response_time_header(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Frontend-ID": "board"})

        assert response.headers["X-Response-Time"].endswith("ms")
