"""Tests for FastAPI health and version endpoints, identity and error mapping."""

import pytest
from httpx import ASGITransport, AsyncClient

from zawia.api.errors import status_for
from zawia.api.main import app
from zawia.models.errors import (
    AlreadyMemberError,
    ExternalServiceError,
    InvalidTokenError,
    InviteTokenFormatError,
    NotAMemberError,
    StoreError,
    WorkspaceFullError,
)


@pytest.fixture
async def bare_client() -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


class TestHealthEndpoint:
    """GET /health always answers, degraded when the database is down."""

    @pytest.mark.anyio
    async def test_health_returns_200(self, bare_client: AsyncClient) -> None:
        response = await bare_client.get("/health")
        assert response.status_code == 200

    @pytest.mark.anyio
    async def test_health_response_body(self, bare_client: AsyncClient) -> None:
        data = (await bare_client.get("/health")).json()
        assert data["status"] in {"ok", "degraded"}
        assert data["checks"]["api"] is True
        assert "environment" in data


class TestVersionEndpoint:
    """GET /api/version returns application version info."""

    @pytest.mark.anyio
    async def test_version_response_body(self, bare_client: AsyncClient) -> None:
        response = await bare_client.get("/api/version")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Zawia"
        assert "version" in data
        assert "environment" in data


class TestIdentity:
    @pytest.mark.anyio
    async def test_missing_user_header_is_401(self, client: AsyncClient) -> None:
        response = await client.get("/v1/spaces")
        assert response.status_code == 401


class TestErrorMapping:
    def test_statuses(self) -> None:
        assert status_for(InviteTokenFormatError("x")) == 422
        assert status_for(InvalidTokenError("x")) == 404
        assert status_for(NotAMemberError("x")) == 403
        assert status_for(WorkspaceFullError("x")) == 409
        assert status_for(AlreadyMemberError("x")) == 409
        assert status_for(StoreError("x")) == 503
        assert status_for(ExternalServiceError("x")) == 502
