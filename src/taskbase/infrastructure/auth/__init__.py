"""Authentication infrastructure components.

This module provides password hashing, bearer token services, and the
authorization gate that protects every non-public endpoint.
"""

from taskbase.infrastructure.auth.jwt_service import (
    Claims,
    InvalidTokenError,
    JWTService,
    TokenError,
    TokenExpiredError,
)
from taskbase.infrastructure.auth.middleware import (
    AuthorizationGate,
    authenticate_header,
    extract_bearer_token,
    is_exempt,
)
from taskbase.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    PasswordHasher,
    hash_password,
    needs_rehash,
    password_hasher,
    verify_password,
)

__all__ = [
    "AuthorizationGate",
    "Claims",
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "JWTService",
    "PasswordHasher",
    "TokenError",
    "TokenExpiredError",
    "authenticate_header",
    "extract_bearer_token",
    "hash_password",
    "is_exempt",
    "needs_rehash",
    "password_hasher",
    "verify_password",
]
