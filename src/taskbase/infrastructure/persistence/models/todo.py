"""SQLAlchemy model for the todos table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskbase.infrastructure.persistence.database import Base


class TodoModel(Base):
    """SQLAlchemy model for the todos table.

    Attributes:
        id: Primary key.
        user_id: Owner of the todo.
        title: Short title.
        description: Free-form description (may be empty).
        is_completed: Whether the todo has been completed.
        created_at: Timestamp when the todo was created.
        updated_at: Timestamp when the todo was last updated.
    """

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    user: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="todos",
    )

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, user_id={self.user_id}, title={self.title})>"
