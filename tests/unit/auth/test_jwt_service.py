"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from taskbase.core.config import Settings
from taskbase.infrastructure.auth.jwt_service import (
    Claims,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.fixture
def service() -> JWTService:
    return JWTService(secret_key=SECRET, expires_delta=timedelta(days=10))


def test_issue_then_decode_preserves_claims(service):
    token = service.issue("alice@example.com", 42)

    claims = service.decode(token)

    assert isinstance(claims, Claims)
    assert claims.id == 42
    assert claims.sub == "alice@example.com"


def test_expiry_is_ten_days_out(service):
    before = datetime.now(timezone.utc)
    claims = service.decode(service.issue("alice@example.com", 1))

    expected = before + timedelta(days=10)
    assert abs((claims.expires_at - expected).total_seconds()) < 5
    assert service.get_expires_in() == 10 * 24 * 60 * 60


def test_payload_contains_only_identity_subject_and_expiry(service):
    token = service.issue("alice@example.com", 7)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])

    assert set(payload) == {"id", "sub", "exp"}
    assert isinstance(payload["exp"], int)


def test_expired_token_raises_token_expired(service):
    expired = JWTService(secret_key=SECRET, expires_delta=timedelta(seconds=-60))
    token = expired.issue("alice@example.com", 1)

    with pytest.raises(TokenExpiredError):
        service.decode(token)


def test_token_signed_with_other_secret_is_invalid(service):
    other = JWTService(secret_key="another-secret-key-0123456789abcdef", expires_delta=timedelta(days=1))
    token = other.issue("alice@example.com", 1)

    with pytest.raises(InvalidTokenError):
        service.decode(token)


def test_expired_forged_token_is_invalid_not_expired(service):
    """The signature is checked before the expiry."""
    forged = JWTService(
        secret_key="another-secret-key-0123456789abcdef",
        expires_delta=timedelta(seconds=-60),
    )
    token = forged.issue("alice@example.com", 1)

    with pytest.raises(InvalidTokenError):
        service.decode(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "Bearer token"])
def test_malformed_token_is_invalid(service, token):
    with pytest.raises(InvalidTokenError):
        service.decode(token)


def test_tampered_payload_is_invalid(service):
    header, _, signature = service.issue("alice@example.com", 1).split(".")
    other_payload = service.issue("mallory@example.com", 2).split(".")[1]

    with pytest.raises(InvalidTokenError):
        service.decode(f"{header}.{other_payload}.{signature}")


@pytest.mark.parametrize("missing", ["id", "sub", "exp"])
def test_missing_claim_is_invalid(service, missing):
    payload = {
        "id": 1,
        "sub": "alice@example.com",
        "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
    }
    del payload[missing]
    token = jwt.encode(payload, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        service.decode(token)


def test_non_integer_identity_is_invalid(service):
    payload = {
        "id": "1",
        "sub": "alice@example.com",
        "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
    }
    token = jwt.encode(payload, SECRET, algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        service.decode(token)


def test_unsigned_token_is_invalid(service):
    payload = {
        "id": 1,
        "sub": "alice@example.com",
        "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
    }
    token = jwt.encode(payload, None, algorithm="none")

    with pytest.raises(InvalidTokenError):
        service.decode(token)


def test_defaults_come_from_settings():
    settings = Settings(secret_key=SECRET, token_expire_days=3)

    service = JWTService(settings=settings)

    assert service.expires_delta == timedelta(days=3)
    assert JWTService(secret_key=SECRET, expires_delta=timedelta(days=3)).decode(
        service.issue("bob@example.com", 5)
    ).id == 5
