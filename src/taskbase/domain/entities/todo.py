"""Todo entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Todo:
    """A task owned by a single user.

    Attributes:
        id: Unique identifier.
        user_id: Owner's identity.
        title: Short title.
        description: Free-form description.
        is_completed: Whether the task is done.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: int
    user_id: int
    title: str
    description: str
    is_completed: bool
    created_at: datetime
    updated_at: datetime
