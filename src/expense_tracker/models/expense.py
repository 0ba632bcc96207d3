"""Expense model representing a single spending record owned by one user."""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from expense_tracker.models.base import BaseModel


class Expense(BaseModel):
    """Expense record.

    ``user_id`` is a plain indexed column rather than a foreign key: deleting
    an account leaves its expenses in place.
    """

    __tablename__ = "expenses"

    user_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, category={self.category}, amount={self.amount})>"
