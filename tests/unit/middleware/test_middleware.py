"""Unit tests for middleware."""

import asyncio

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.middleware.timeout import RequestTimeoutMiddleware


def _create_app_with_middleware(timeout_seconds: float = 5.0) -> FastAPI:
    """Create a minimal FastAPI app with the profile API's middleware stack."""
    app = FastAPI()
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=timeout_seconds)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/slow")
    async def _slow():
        await asyncio.sleep(1)
        return {"ok": True}

    return app


async def _get(app: FastAPI, path: str, **kwargs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, **kwargs)


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    async def test_adds_security_headers(self):
        response = await _get(_create_app_with_middleware(), "/test")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        response = await _get(_create_app_with_middleware(), "/test")

        assert len(response.headers["x-request-id"]) > 0

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        response = await _get(
            _create_app_with_middleware(), "/test", headers={"X-Request-ID": "custom-req-123"}
        )

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_replaces_oversized_request_id(self):
        oversized = "x" * 500

        response = await _get(
            _create_app_with_middleware(), "/test", headers={"X-Request-ID": oversized}
        )

        assert response.headers["x-request-id"] != oversized


class TestRequestTimeoutMiddleware:
    @pytest.mark.asyncio
    async def test_fast_request_passes(self):
        response = await _get(_create_app_with_middleware(timeout_seconds=5), "/test")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_slow_request_returns_504(self):
        response = await _get(_create_app_with_middleware(timeout_seconds=0.05), "/slow")

        assert response.status_code == 504
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "REQUEST_TIMEOUT"

    @pytest.mark.asyncio
    async def test_zero_disables_timeout(self):
        app = _create_app_with_middleware(timeout_seconds=0)

        response = await _get(app, "/test")

        assert response.status_code == 200
