"""Password hashing utility using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
which is the winner of the Password Hashing Competition and recommended by OWASP.
The encoded hash carries the algorithm, parameters and salt, so verification
needs nothing but the stored string.
"""

import asyncio

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import (
    HashingError as Argon2HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from taskbase.core.exceptions import HashingError


class PasswordHasher:
    """Argon2id hasher with the library's default work factor."""

    def __init__(self, hasher: Argon2Hasher | None = None) -> None:
        self._hasher = hasher or Argon2Hasher()

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            password: The plaintext password to hash.

        Returns:
            The encoded hash string.

        Raises:
            HashingError: If the argon2 backend fails.

        Example:
            >>> hashed = PasswordHasher().hash("SecureP4ss")
            >>> hashed.startswith("$argon2id$")
            True
        """
        try:
            return self._hasher.hash(password)
        except Argon2HashingError as e:
            raise HashingError("Password hashing failed") from e

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against an encoded hash.

        Uses constant-time comparison to prevent timing attacks.

        Args:
            password: The plaintext password to verify.
            hashed: The encoded hash to verify against.

        Returns:
            True if the password matches, False otherwise.

        Raises:
            HashingError: If the stored hash is malformed or corrupted.
        """
        try:
            return self._hasher.verify(hashed, password)
        except VerifyMismatchError:
            return False
        except (InvalidHashError, VerificationError) as e:
            raise HashingError("Stored password hash is invalid") from e

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a hash was produced with outdated parameters."""
        try:
            return self._hasher.check_needs_rehash(hashed)
        except InvalidHashError as e:
            raise HashingError("Stored password hash is invalid") from e

    async def hash_async(self, password: str) -> str:
        """Hash on a worker thread so the event loop keeps serving requests."""
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        """Verify on a worker thread so the event loop keeps serving requests."""
        return await asyncio.to_thread(self.verify, password, hashed)


password_hasher = PasswordHasher()

# Verified against when an email is unknown, so that a miss costs the same
# as a wrong password.
DUMMY_PASSWORD_HASH = password_hasher.hash("taskbase-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using the default hasher."""
    return password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password using the default hasher."""
    return password_hasher.verify(password, hashed)


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash needs to be rehashed."""
    return password_hasher.needs_rehash(hashed)
