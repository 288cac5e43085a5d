"""SQLAlchemy model for the user_credentials table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskbase.infrastructure.persistence.database import Base


class UserCredentialModel(Base):
    """SQLAlchemy model for the user_credentials table.

    Only the encoded argon2 hash is stored, never the plaintext.

    Attributes:
        id: Primary key.
        user_id: Foreign key to users table (one credential per user).
        password_hash: Self-describing argon2 encoded hash.
    """

    __tablename__ = "user_credentials"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
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
        back_populates="credential",
    )

    def __repr__(self) -> str:
        return f"<UserCredential(user_id={self.user_id})>"
