"""Exception hierarchy for TaskBase.

Every failure the authentication core can report has its own class so that
callers (and the HTTP layer) can tell system failures apart from
authentication failures without inspecting messages.
"""

from dataclasses import dataclass


class TaskBaseError(Exception):
    """Base exception for all TaskBase errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message or self.__class__.__doc__ or ""
        super().__init__(self.message)


class DatabaseError(TaskBaseError):
    """A query or connection against the database failed."""


class PoolError(DatabaseError):
    """No database connection could be obtained from the pool."""


class HashingError(TaskBaseError):
    """A stored password hash is malformed or the hashing backend failed."""


class TokenError(TaskBaseError):
    """Base exception for bearer token failures."""


class InvalidTokenError(TokenError):
    """The token is malformed, forged, or signed with another key."""


class TokenExpiredError(TokenError):
    """The token is correctly signed but past its expiry."""


class DuplicateIdentityError(TaskBaseError):
    """A user with this email address is already registered."""

    def __init__(self, email: str | None = None) -> None:
        self.email = email
        super().__init__("A user with this email already exists")


class NotAuthenticatedError(TaskBaseError):
    """Unknown email or wrong password.

    The two cases are deliberately indistinguishable.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


@dataclass(frozen=True)
class FieldError:
    """A single input validation failure.

    Attributes:
        field: The offending field name.
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class ValidationError(TaskBaseError):
    """Request input has the wrong shape."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


class TodoNotFoundError(TaskBaseError):
    """The todo does not exist or belongs to another user."""

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id
        super().__init__(f"Todo {todo_id} not found")


class UserNotFoundError(TaskBaseError):
    """The authenticated identity refers to a user that no longer exists."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")
