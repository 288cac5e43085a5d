"""SQLAlchemy model for the user_profiles table.

The profile's email is the natural key used at login and is unique across
all users.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskbase.infrastructure.persistence.database import Base

EMAIL_UNIQUE_CONSTRAINT = "uq_user_profiles_email"


class UserProfileModel(Base):
    """SQLAlchemy model for the user_profiles table.

    Attributes:
        id: Primary key.
        user_id: Foreign key to users table (one profile per user).
        name: Display name.
        email: Email address, unique across all profiles.
    """

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(319), nullable=False)
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
        back_populates="profile",
    )

    __table_args__ = (UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),)

    def __repr__(self) -> str:
        return f"<UserProfile(user_id={self.user_id}, email={self.email})>"
