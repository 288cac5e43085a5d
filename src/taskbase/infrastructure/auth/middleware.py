"""Authorization gate for TaskBase.

Every request that is not on the exempt list must carry
``Authorization: Bearer <token>``. The token is validated here, before
routing, dependency resolution or any database session is created; a
rejected request never reaches a handler.

On success the decoded claims are stored on ``request.state.claims``.
"""

from collections.abc import Iterable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from taskbase.core.logging import get_logger
from taskbase.infrastructure.auth.jwt_service import (
    Claims,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

logger = get_logger(__name__)

BEARER_SCHEME = "Bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the token from an Authorization header value.

    The header must be the literal scheme ``Bearer`` followed by exactly one
    token. Any other shape is reported the same way as an invalid token.

    Raises:
        InvalidTokenError: If the header is missing or malformed.
    """
    if not authorization:
        raise InvalidTokenError("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        raise InvalidTokenError("Invalid Authorization header format")

    return parts[1]


def authenticate_header(authorization: str | None, token_service: JWTService) -> Claims:
    """Validate an Authorization header and return its claims.

    Raises:
        InvalidTokenError: If the header is malformed or the token forged.
        TokenExpiredError: If the token has expired.
    """
    return token_service.decode(extract_bearer_token(authorization))


def is_exempt(path: str, exempt_paths: Iterable[str]) -> bool:
    """Check whether a path falls under one of the exempt prefixes.

    A prefix matches the path itself or anything below it, so ``/health``
    exempts ``/health`` and ``/health/db`` but not ``/healthz``.
    """
    for prefix in exempt_paths:
        prefix = prefix.rstrip("/") or "/"
        if path == prefix or path.startswith(prefix + "/"):
            return True
    return False


def unauthorized_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": "Unauthorized", "message": message},
        headers={"WWW-Authenticate": BEARER_SCHEME},
    )


class AuthorizationGate(BaseHTTPMiddleware):
    """Reject unauthenticated requests before they reach any handler."""

    def __init__(
        self,
        app: ASGIApp,
        token_service: JWTService,
        exempt_paths: Iterable[str] = (),
    ) -> None:
        """Initialize the gate.

        Args:
            app: The downstream ASGI application.
            token_service: Service used to decode bearer tokens.
            exempt_paths: Path prefixes reachable without a token.
        """
        super().__init__(app)
        self.token_service = token_service
        self.exempt_paths = tuple(exempt_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Authenticate the request or short-circuit with 401.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application, or a 401 response.
        """
        # CORS preflight requests never carry credentials
        if request.method == "OPTIONS" or is_exempt(request.url.path, self.exempt_paths):
            return await call_next(request)

        try:
            claims = authenticate_header(
                request.headers.get("Authorization"), self.token_service
            )
        except TokenExpiredError:
            logger.info("Authorization rejected: token expired", path=request.url.path)
            return unauthorized_response("Token has expired")
        except InvalidTokenError as e:
            logger.info(
                "Authorization rejected: invalid token",
                path=request.url.path,
                reason=e.message,
            )
            return unauthorized_response("Could not validate credentials")

        request.state.claims = claims
        return await call_next(request)
