"""Persistence repositories for database operations."""

from taskbase.infrastructure.persistence.repositories.credential_repository import (
    CredentialRepository,
)
from taskbase.infrastructure.persistence.repositories.todo_repository import (
    TodoRepository,
)

__all__ = ["CredentialRepository", "TodoRepository"]
