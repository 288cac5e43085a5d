"""User entities for authentication.

A user is split across three records: the identity (``id``), the profile
(name and email) and the credential (password hash).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Public view of a user.

    Attributes:
        id: The user's identity.
        name: Display name.
        email: Email address, unique across all users.
    """

    id: int
    name: str
    email: str


@dataclass(frozen=True)
class UserCredentials:
    """A user's profile joined with their stored password hash.

    Only ever handed to the password verifier; never serialized.
    """

    id: int
    name: str
    email: str
    password_hash: str

    @property
    def profile(self) -> UserProfile:
        return UserProfile(id=self.id, name=self.name, email=self.email)

    def __repr__(self) -> str:
        return f"UserCredentials(id={self.id}, email={self.email})"
