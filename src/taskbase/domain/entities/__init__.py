"""Domain entities for TaskBase.

Entities are plain dataclasses with no dependency on the database or web
framework.
"""

from taskbase.domain.entities.todo import Todo
from taskbase.domain.entities.user import UserCredentials, UserProfile

__all__ = ["Todo", "UserCredentials", "UserProfile"]
