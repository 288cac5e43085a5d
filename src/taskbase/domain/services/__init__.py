"""Domain services for TaskBase.

Services contain the business logic of each use case and translate between
requests and the persistence layer.
"""

from taskbase.domain.services.auth_service import AuthResult, AuthService
from taskbase.domain.services.credential_validator import (
    CredentialValidator,
    default_credential_validator,
    normalize_email,
)
from taskbase.domain.services.todo_service import TodoService

__all__ = [
    "AuthResult",
    "AuthService",
    "CredentialValidator",
    "TodoService",
    "default_credential_validator",
    "normalize_email",
]
