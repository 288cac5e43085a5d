"""FastAPI dependencies for sessions, services and the current user.

Services and the database manager live on ``app.state`` and are created by
the application factory; nothing here is a module-level singleton.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.config import Settings
from taskbase.domain.services import AuthService, CredentialValidator, TodoService
from taskbase.infrastructure.auth import Claims, JWTService
from taskbase.infrastructure.persistence.database import DatabaseManager


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_db_manager(request: Request) -> DatabaseManager:
    return request.app.state.db


def get_token_service(request: Request) -> JWTService:
    return request.app.state.token_service


async def get_db_session(
    db: Annotated[DatabaseManager, Depends(get_db_manager)],
) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get a database session.

    The session is only opened once the request has passed the
    authorization gate and its handler is about to run.

    Yields:
        AsyncSession: SQLAlchemy async session.
    """
    async with db.session() as session:
        yield session


def get_current_claims(request: Request) -> Claims:
    """Return the claims the authorization gate attached to the request.

    Raises:
        HTTPException: 401 if the request was not authenticated.
    """
    claims = getattr(request.state, "claims", None)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims


def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    token_service: Annotated[JWTService, Depends(get_token_service)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> AuthService:
    validator = CredentialValidator(
        min_length=settings.password_min_length,
        max_length=settings.password_max_length,
    )
    return AuthService(session, token_service, validator=validator)


def get_todo_service(
    claims: Annotated[Claims, Depends(get_current_claims)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> TodoService:
    return TodoService(session, claims.id)


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
TokenServiceDep = Annotated[JWTService, Depends(get_token_service)]
CurrentClaims = Annotated[Claims, Depends(get_current_claims)]
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]
