"""Credential store: identity, profile and credential persistence.

Registration writes three rows (users, user_profiles, user_credentials) as
one transaction. Either all three are committed or none are.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.exceptions import DuplicateIdentityError
from taskbase.core.logging import get_logger
from taskbase.domain.entities import UserCredentials, UserProfile
from taskbase.infrastructure.persistence.errors import is_unique_violation, translate_error
from taskbase.infrastructure.persistence.models import (
    EMAIL_UNIQUE_CONSTRAINT,
    UserCredentialModel,
    UserModel,
    UserProfileModel,
)

logger = get_logger(__name__)


class CredentialRepository:
    """Repository for user identity, profile and credential rows."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def register(self, name: str, email: str, password_hash: str) -> UserProfile:
        """Create a user's identity, profile and credential atomically.

        Args:
            name: Display name.
            email: Normalized email address.
            password_hash: Encoded password hash.

        Returns:
            The new user's profile.

        Raises:
            DuplicateIdentityError: If the email is already registered.
            PoolError: If no connection could be obtained.
            DatabaseError: If any other database error occurs.
        """
        try:
            user = UserModel()
            self.session.add(user)
            await self.session.flush()

            self.session.add(UserProfileModel(user_id=user.id, name=name, email=email))
            await self.session.flush()

            self.session.add(
                UserCredentialModel(user_id=user.id, password_hash=password_hash)
            )
            await self.session.flush()

            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e, EMAIL_UNIQUE_CONSTRAINT, "user_profiles.email"):
                logger.info("Registration rejected: duplicate email")
                raise DuplicateIdentityError(email) from e
            logger.error("Registration failed: integrity error", error=str(e.orig))
            raise translate_error(e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Registration failed: database error", error=str(e))
            raise translate_error(e) from e
        except BaseException:
            # Cancellation or anything unexpected: nothing may be left half-written
            await self.session.rollback()
            raise

        return UserProfile(id=user.id, name=name, email=email)

    async def find_by_email(self, email: str) -> UserCredentials | None:
        """Look up a user's profile and password hash by email.

        Args:
            email: Normalized email address.

        Returns:
            The joined profile and credential, or None if no user has this email.

        Raises:
            PoolError: If no connection could be obtained.
            DatabaseError: If the query fails.
        """
        try:
            result = await self.session.execute(
                select(
                    UserProfileModel.user_id,
                    UserProfileModel.name,
                    UserProfileModel.email,
                    UserCredentialModel.password_hash,
                )
                .join(
                    UserCredentialModel,
                    UserCredentialModel.user_id == UserProfileModel.user_id,
                )
                .where(UserProfileModel.email == email)
            )
            row = result.one_or_none()
        except SQLAlchemyError as e:
            logger.error("Credential lookup failed", error=str(e))
            raise translate_error(e) from e

        if row is None:
            return None

        return UserCredentials(
            id=row.user_id,
            name=row.name,
            email=row.email,
            password_hash=row.password_hash,
        )

    async def get_profile(self, user_id: int) -> UserProfile | None:
        """Get a user's profile by identity.

        Args:
            user_id: The user's identity.

        Returns:
            The profile, or None if the user does not exist.
        """
        try:
            result = await self.session.execute(
                select(UserProfileModel).where(UserProfileModel.user_id == user_id)
            )
            profile = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Profile lookup failed", user_id=user_id, error=str(e))
            raise translate_error(e) from e

        if profile is None:
            return None
        return UserProfile(id=profile.user_id, name=profile.name, email=profile.email)
