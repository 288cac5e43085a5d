"""JWT token service.

Issues and validates the stateless bearer tokens used by every
authenticated request. The payload is ``{"id", "sub", "exp"}``: the user's
identity, their email, and a UNIX expiry timestamp.
"""

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from taskbase.core.config import Settings, get_settings
from taskbase.core.exceptions import InvalidTokenError, TokenError, TokenExpiredError


@dataclass(frozen=True)
class Claims:
    """Decoded bearer token payload.

    Attributes:
        id: The user's identity.
        sub: The user's email address.
        exp: Expiry as a UNIX timestamp.
    """

    id: int
    sub: str
    exp: int

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class JWTService:
    """Service for creating and validating bearer tokens.

    A single static HMAC secret signs every token; there is no key rotation.
    """

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ["id", "sub", "exp"]

    def __init__(
        self,
        secret_key: str | None = None,
        expires_delta: timedelta | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
            expires_delta: Token lifetime. Defaults to the configured
                           number of days (10).
            settings: Settings to read defaults from.
        """
        if secret_key is None or expires_delta is None:
            settings = settings or get_settings()
        self._secret_key = secret_key or settings.secret_key
        self._expires_delta = expires_delta or timedelta(days=settings.token_expire_days)

    @property
    def expires_delta(self) -> timedelta:
        return self._expires_delta

    def issue(self, subject: str, identity: int) -> str:
        """Create a signed bearer token.

        Args:
            subject: The user's email address.
            identity: The user's identity.

        Returns:
            Encoded JWT.
        """
        expire = datetime.now(timezone.utc) + self._expires_delta
        payload = {
            "id": identity,
            "sub": subject,
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def decode(self, token: str) -> Claims:
        """Decode and validate a bearer token.

        The signature is checked before any claim is interpreted.

        Args:
            token: The encoded JWT.

        Returns:
            The token's claims.

        Raises:
            TokenExpiredError: If the token is correctly signed but expired.
            InvalidTokenError: If the token is malformed or forged.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": self.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        identity = payload["id"]
        subject = payload["sub"]
        if not isinstance(identity, int) or isinstance(identity, bool):
            raise InvalidTokenError("Invalid token")
        if not isinstance(subject, str) or not subject:
            raise InvalidTokenError("Invalid token")

        return Claims(id=identity, sub=subject, exp=int(payload["exp"]))

    def get_expires_in(self) -> int:
        """Get the token lifetime in seconds."""
        return int(self._expires_delta.total_seconds())


__all__ = [
    "Claims",
    "InvalidTokenError",
    "JWTService",
    "TokenError",
    "TokenExpiredError",
]
