"""Authentication use cases: registration and login.

Orchestrates the credential store, the password hasher and the token
service. Outcomes are reported as return values (success) or typed
exceptions:

- ``ValidationError``: malformed input, nothing was read or written
- ``DuplicateIdentityError``: the email is already registered
- ``NotAuthenticatedError``: unknown email or wrong password (unified)
- ``DatabaseError`` / ``PoolError`` / ``HashingError``: system failures,
  never reported as an authentication failure
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.exceptions import NotAuthenticatedError
from taskbase.core.logging import get_logger
from taskbase.domain.entities import UserProfile
from taskbase.domain.services.credential_validator import (
    CredentialValidator,
    default_credential_validator,
    normalize_email,
)
from taskbase.infrastructure.auth.jwt_service import JWTService
from taskbase.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    PasswordHasher,
    password_hasher as default_password_hasher,
)
from taskbase.infrastructure.persistence.repositories import CredentialRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """A successful registration or login.

    Attributes:
        user: The authenticated user's profile.
        token: Signed bearer token.
        expires_in: Token lifetime in seconds.
    """

    user: UserProfile
    token: str
    expires_in: int


class AuthService:
    """Registration and login for a single request."""

    def __init__(
        self,
        session: AsyncSession,
        token_service: JWTService,
        password_hasher: PasswordHasher | None = None,
        validator: CredentialValidator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            session: Database session for the current request.
            token_service: Service that signs bearer tokens.
            password_hasher: Argon2 hasher. Defaults to the shared instance.
            validator: Input validator. Defaults to the standard policy.
        """
        self.credentials = CredentialRepository(session)
        self.token_service = token_service
        self.password_hasher = password_hasher or default_password_hasher
        self.validator = validator or default_credential_validator

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Register a new user and issue their first token.

        Args:
            name: Display name.
            email: Email address.
            password: Plaintext password.

        Returns:
            The new user's profile and token.

        Raises:
            ValidationError: If any field is malformed.
            DuplicateIdentityError: If the email is already registered.
            HashingError: If hashing fails.
            DatabaseError: If the database write fails.
        """
        name = name.strip()
        email = normalize_email(email)
        self.validator.check_registration(name, email, password)

        password_hash = await self.password_hasher.hash_async(password)
        user = await self.credentials.register(name, email, password_hash)

        logger.info("User registered", user_id=user.id)
        return self._issue(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password.

        Args:
            email: Email address.
            password: Plaintext password.

        Returns:
            The user's profile and a fresh token.

        Raises:
            ValidationError: If the input is malformed.
            NotAuthenticatedError: If the email is unknown or the password wrong.
            HashingError: If the stored hash is corrupted.
            DatabaseError: If the lookup fails.
        """
        email = normalize_email(email)
        self.validator.check_login(email, password)

        record = await self.credentials.find_by_email(email)

        if record is None:
            # Spend the same time as a real verification
            await self.password_hasher.verify_async(password, DUMMY_PASSWORD_HASH)
            logger.info("Login failed: invalid credentials")
            raise NotAuthenticatedError()

        if not await self.password_hasher.verify_async(password, record.password_hash):
            logger.info("Login failed: invalid credentials", user_id=record.id)
            raise NotAuthenticatedError()

        logger.info("User logged in", user_id=record.id)
        return self._issue(record.profile)

    def _issue(self, user: UserProfile) -> AuthResult:
        return AuthResult(
            user=user,
            token=self.token_service.issue(user.email, user.id),
            expires_in=self.token_service.get_expires_in(),
        )
