"""SQLAlchemy models for TaskBase tables.

All models inherit from the Base class defined in database.py and are
created on application startup.
"""

from taskbase.infrastructure.persistence.models.todo import TodoModel
from taskbase.infrastructure.persistence.models.user import UserModel
from taskbase.infrastructure.persistence.models.user_credential import UserCredentialModel
from taskbase.infrastructure.persistence.models.user_profile import (
    EMAIL_UNIQUE_CONSTRAINT,
    UserProfileModel,
)

__all__ = [
    "EMAIL_UNIQUE_CONSTRAINT",
    "TodoModel",
    "UserCredentialModel",
    "UserModel",
    "UserProfileModel",
]
