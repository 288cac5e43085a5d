"""Authentication API routes.

Provides endpoints for user registration, login, logout and session checks.
Registration, login, logout and login-status are public; ``/user`` requires a
bearer token.
"""

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from taskbase.core.config import Settings
from taskbase.core.exceptions import InvalidTokenError, TokenError, UserNotFoundError
from taskbase.core.logging import get_logger
from taskbase.domain.services import AuthResult
from taskbase.infrastructure.api.dependencies import (
    AuthServiceDep,
    CurrentClaims,
    DBSession,
    SettingsDep,
    TokenServiceDep,
)
from taskbase.infrastructure.api.schemas import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    UserResponse,
    ValidationErrorResponse,
)
from taskbase.infrastructure.auth import authenticate_header
from taskbase.infrastructure.persistence.repositories import CredentialRepository

logger = get_logger(__name__)

router = APIRouter()


def set_auth_cookie(response: Response, result: AuthResult, settings: Settings) -> None:
    """Mirror the bearer token into an HttpOnly cookie for browser clients."""
    response.set_cookie(
        key=settings.cookie_name,
        value=result.token,
        max_age=result.expires_in,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def to_auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        token=result.token,
        expires_in=result.expires_in,
        user=UserResponse(
            id=result.user.id,
            name=result.user.name,
            email=result.user.email,
        ),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Register a new user.

    Creates the user's identity, profile and credential in one transaction
    and returns a bearer token for immediate use.
    """
    result = await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
    )
    set_auth_cookie(response, result, settings)
    return to_auth_response(result)


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
    settings: SettingsDep,
) -> AuthResponse:
    """Authenticate a user and return a bearer token.

    Security:
    - Unknown email and wrong password produce the same 401 response
    - Password verification always runs, even for unknown emails
    """
    result = await auth_service.login(email=request.email, password=request.password)
    set_auth_cookie(response, result, settings)
    return to_auth_response(result)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: SettingsDep) -> LogoutResponse:
    """Clear the auth cookie.

    Tokens are stateless, so a bearer token stays valid until it expires.
    """
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )
    return LogoutResponse()


@router.get("/login-status", responses={401: {"description": "Not logged in"}})
async def login_status(request: Request, token_service: TokenServiceDep) -> JSONResponse:
    """Report whether the request carries a valid bearer token."""
    try:
        authenticate_header(request.headers.get("Authorization"), token_service)
    except TokenError as e:
        reason = "invalid" if isinstance(e, InvalidTokenError) else "expired"
        logger.debug("Login status check failed", reason=reason)
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=False)
    return JSONResponse(status_code=status.HTTP_200_OK, content=True)


@router.get(
    "/user",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse, "description": "User no longer exists"}},
)
async def current_user(claims: CurrentClaims, session: DBSession) -> UserResponse:
    """Return the profile of the authenticated user."""
    profile = await CredentialRepository(session).get_profile(claims.id)
    if profile is None:
        logger.info("Token refers to a missing user", user_id=claims.id)
        raise UserNotFoundError(claims.id)
    return UserResponse(id=profile.id, name=profile.name, email=profile.email)
