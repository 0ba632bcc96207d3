"""User model for authentication and data ownership."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from expense_tracker.models.base import BaseModel


class User(BaseModel):
    """Registered account. Emails are stored lower-cased."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
