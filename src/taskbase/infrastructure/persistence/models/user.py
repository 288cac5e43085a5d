"""SQLAlchemy model for the users table.

A row here is a user's identity and nothing else: profile data and the
password hash live in their own tables, keyed by ``user_id``.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskbase.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key, assigned once and never reused.
        created_at: Timestamp when the user was registered.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"
    # SQLite reuses the largest rowid after a delete unless AUTOINCREMENT is set
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
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

    profile: Mapped["UserProfileModel"] = relationship(  # noqa: F821
        "UserProfileModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    credential: Mapped["UserCredentialModel"] = relationship(  # noqa: F821
        "UserCredentialModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    todos: Mapped[list["TodoModel"]] = relationship(  # noqa: F821
        "TodoModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id})>"
