"""Unit tests for the authorization gate and its helpers."""

from datetime import timedelta

import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from starlette.middleware.base import BaseHTTPMiddleware

from taskbase.infrastructure.auth import (
    AuthorizationGate,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    authenticate_header,
    extract_bearer_token,
    is_exempt,
)

SECRET = "gate-test-secret-key-0123456789abcdef"


class TestExtractBearerToken:
    """Tests for parsing the Authorization header."""

    def test_valid_header(self):
        assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "Bearer",
            "abc.def.ghi",
            "Basic dXNlcjpwYXNz",
            "bearer abc.def.ghi",
            "Bearer abc def",
            "Token abc.def.ghi",
        ],
    )
    def test_malformed_headers_are_invalid(self, header):
        with pytest.raises(InvalidTokenError):
            extract_bearer_token(header)


class TestIsExempt:
    """Tests for exempt path matching."""

    paths = ["/health", "/api/v1/auth/login", "/docs/"]

    def test_exact_match(self):
        assert is_exempt("/health", self.paths)
        assert is_exempt("/api/v1/auth/login", self.paths)

    def test_sub_path_match(self):
        assert is_exempt("/health/db", self.paths)
        assert is_exempt("/docs/oauth2-redirect", self.paths)
        assert is_exempt("/docs", self.paths)

    def test_prefix_of_a_word_does_not_match(self):
        assert not is_exempt("/healthz", self.paths)
        assert not is_exempt("/api/v1/auth/login-status", self.paths)

    def test_protected_paths(self):
        assert not is_exempt("/api/v1/todos", self.paths)
        assert not is_exempt("/", self.paths)


def test_gate_is_http_middleware():
    assert issubclass(AuthorizationGate, BaseHTTPMiddleware)


def test_authenticate_header_returns_claims():
    service = JWTService(secret_key=SECRET, expires_delta=timedelta(days=1))
    token = service.issue("alice@example.com", 3)

    claims = authenticate_header(f"Bearer {token}", service)

    assert claims.id == 3
    assert claims.sub == "alice@example.com"


def test_authenticate_header_reports_expiry():
    service = JWTService(secret_key=SECRET, expires_delta=timedelta(seconds=-30))

    with pytest.raises(TokenExpiredError):
        authenticate_header(f"Bearer {service.issue('alice@example.com', 3)}", service)


@pytest.fixture
def gate_service() -> JWTService:
    return JWTService(secret_key=SECRET, expires_delta=timedelta(days=1))


@pytest.fixture
def handled() -> list[str]:
    """Paths whose handlers actually ran."""
    return []


@pytest.fixture
def gated_app(gate_service: JWTService, handled: list[str]) -> FastAPI:
    """Minimal app with one public and one protected endpoint."""
    app = FastAPI()

    @app.get("/public/ping")
    async def ping():
        handled.append("/public/ping")
        return {"ok": True}

    @app.get("/private")
    async def private(request: Request):
        handled.append("/private")
        claims = request.state.claims
        return {"id": claims.id, "sub": claims.sub}

    app.add_middleware(AuthorizationGate, token_service=gate_service, exempt_paths=["/public"])
    return app


@pytest_asyncio.fixture
async def gated_client(gated_app):
    async with AsyncClient(transport=ASGITransport(app=gated_app), base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_exempt_path_needs_no_token(gated_client, handled):
    response = await gated_client.get("/public/ping")

    assert response.status_code == 200
    assert handled == ["/public/ping"]


@pytest.mark.asyncio
async def test_missing_header_is_rejected_before_handler(gated_client, handled):
    response = await gated_client.get("/private")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {
        "error": "Unauthorized",
        "message": "Could not validate credentials",
    }
    assert handled == []


@pytest.mark.asyncio
async def test_garbage_token_is_rejected_before_handler(gated_client, handled):
    response = await gated_client.get("/private", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert handled == []


@pytest.mark.asyncio
async def test_wrong_scheme_is_rejected(gated_client, gate_service, handled):
    token = gate_service.issue("alice@example.com", 1)

    response = await gated_client.get("/private", headers={"Authorization": f"Token {token}"})

    assert response.status_code == 401
    assert handled == []


@pytest.mark.asyncio
async def test_expired_token_is_rejected(gated_client, handled):
    expired = JWTService(secret_key=SECRET, expires_delta=timedelta(seconds=-30))
    token = expired.issue("alice@example.com", 1)

    response = await gated_client.get("/private", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"
    assert handled == []


@pytest.mark.asyncio
async def test_valid_token_reaches_handler_with_claims(gated_client, gate_service, handled):
    token = gate_service.issue("alice@example.com", 9)

    response = await gated_client.get("/private", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"id": 9, "sub": "alice@example.com"}
    assert handled == ["/private"]


@pytest.mark.asyncio
async def test_options_requests_pass_through(gated_client):
    response = await gated_client.options("/private")

    # No route handles OPTIONS; the point is that the gate did not answer 401
    assert response.status_code == 405
