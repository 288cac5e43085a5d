"""Todo repository for database operations.

Every query is scoped by the owner's identity, so a user can never read or
modify another user's todos through this repository.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskbase.core.exceptions import UserNotFoundError
from taskbase.core.logging import get_logger
from taskbase.domain.entities import Todo
from taskbase.infrastructure.persistence.errors import (
    is_foreign_key_violation,
    translate_error,
)
from taskbase.infrastructure.persistence.models import TodoModel

logger = get_logger(__name__)


def to_entity(model: TodoModel) -> Todo:
    return Todo(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        description=model.description,
        is_completed=model.is_completed,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class TodoRepository:
    """Repository for todo database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def list_for_user(self, user_id: int) -> list[Todo]:
        """List a user's todos, oldest first.

        Args:
            user_id: Owner's identity.

        Returns:
            List of todos.
        """
        try:
            result = await self.session.execute(
                select(TodoModel)
                .where(TodoModel.user_id == user_id)
                .order_by(TodoModel.id)
            )
            return [to_entity(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Listing todos failed", user_id=user_id, error=str(e))
            raise translate_error(e) from e

    async def get(self, user_id: int, todo_id: int) -> Todo | None:
        """Get one of a user's todos.

        Returns:
            The todo, or None if it does not exist or belongs to someone else.
        """
        model = await self._get_model(user_id, todo_id)
        return to_entity(model) if model is not None else None

    async def create(self, user_id: int, title: str, description: str) -> Todo:
        """Create a todo.

        Args:
            user_id: Owner's identity.
            title: Todo title.
            description: Todo description.

        Returns:
            The created todo.
        """
        model = TodoModel(
            user_id=user_id,
            title=title,
            description=description,
            is_completed=False,
        )
        return await self._save(model)

    async def update(
        self,
        user_id: int,
        todo_id: int,
        title: str | None = None,
        description: str | None = None,
        is_completed: bool | None = None,
    ) -> Todo | None:
        """Update the given fields of a todo.

        Fields left as None are not changed.

        Returns:
            The updated todo, or None if it was not found.
        """
        model = await self._get_model(user_id, todo_id)
        if model is None:
            return None

        if title is not None:
            model.title = title
        if description is not None:
            model.description = description
        if is_completed is not None:
            model.is_completed = is_completed

        return await self._save(model)

    async def delete(self, user_id: int, todo_id: int) -> bool:
        """Delete a todo.

        Returns:
            True if deleted, False if it was not found.
        """
        model = await self._get_model(user_id, todo_id)
        if model is None:
            return False

        try:
            await self.session.delete(model)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Deleting todo failed", todo_id=todo_id, error=str(e))
            raise translate_error(e) from e
        return True

    async def _get_model(self, user_id: int, todo_id: int) -> TodoModel | None:
        try:
            result = await self.session.execute(
                select(TodoModel).where(
                    TodoModel.id == todo_id,
                    TodoModel.user_id == user_id,
                )
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Loading todo failed", todo_id=todo_id, error=str(e))
            raise translate_error(e) from e

    async def _save(self, model: TodoModel) -> Todo:
        try:
            self.session.add(model)
            await self.session.commit()
            await self.session.refresh(model)
        except IntegrityError as e:
            await self.session.rollback()
            if is_foreign_key_violation(e):
                logger.warning("Todo owner does not exist", user_id=model.user_id)
                raise UserNotFoundError(model.user_id) from e
            logger.error("Saving todo failed", error=str(e))
            raise translate_error(e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Saving todo failed", error=str(e))
            raise translate_error(e) from e
        return to_entity(model)
