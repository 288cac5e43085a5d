"""Todo use cases for an authenticated user."""

from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.exceptions import FieldError, TodoNotFoundError, ValidationError
from taskbase.core.logging import get_logger
from taskbase.domain.entities import Todo
from taskbase.infrastructure.persistence.repositories import TodoRepository

logger = get_logger(__name__)

TITLE_MAX_LENGTH = 255


def _check_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValidationError(
            [FieldError(field="title", message="Title is required", code="title_required")]
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            [
                FieldError(
                    field="title",
                    message=f"Title must be at most {TITLE_MAX_LENGTH} characters",
                    code="title_too_long",
                )
            ]
        )
    return title


class TodoService:
    """Manage the todos owned by one user."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.todos = TodoRepository(session)
        self.user_id = user_id

    async def list_todos(self) -> list[Todo]:
        return await self.todos.list_for_user(self.user_id)

    async def get(self, todo_id: int) -> Todo:
        todo = await self.todos.get(self.user_id, todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    async def create(self, title: str, description: str = "") -> Todo:
        todo = await self.todos.create(self.user_id, _check_title(title), description)
        logger.info("Todo created", user_id=self.user_id, todo_id=todo.id)
        return todo

    async def update(
        self,
        todo_id: int,
        title: str | None = None,
        description: str | None = None,
        is_completed: bool | None = None,
    ) -> Todo:
        if title is not None:
            title = _check_title(title)
        todo = await self.todos.update(
            self.user_id,
            todo_id,
            title=title,
            description=description,
            is_completed=is_completed,
        )
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    async def complete(self, todo_id: int) -> Todo:
        """Mark a todo as completed."""
        return await self.update(todo_id, is_completed=True)

    async def delete(self, todo_id: int) -> None:
        if not await self.todos.delete(self.user_id, todo_id):
            raise TodoNotFoundError(todo_id)
        logger.info("Todo deleted", user_id=self.user_id, todo_id=todo_id)
