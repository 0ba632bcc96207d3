"""Expense repository with owner-scoped queries.

Every lookup filters on both the expense id and the owner id, so another
user's record behaves exactly like a missing one.
"""
from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.models.expense import Expense
from expense_tracker.repositories.base import BaseRepository

CENTS = Decimal("0.01")


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for Expense model with user-scoped security."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Expense)

    async def add(
        self, owner_id: UUID, title: str, amount: Decimal, category: str
    ) -> Expense:
        return await self.create(
            Expense(user_id=owner_id, title=title, amount=amount, category=category)
        )

    async def get_by_owner(self, owner_id: UUID, expense_id: UUID) -> Expense | None:
        """Get expense only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Expense).where(Expense.id == expense_id, Expense.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UUID) -> list[Expense]:
        result = await self.db.execute(
            select(Expense)
            .where(Expense.user_id == owner_id)
            .order_by(Expense.created_at)
        )
        return list(result.scalars().all())

    async def update_owned(
        self,
        owner_id: UUID,
        expense_id: UUID,
        title: str,
        amount: Decimal,
        category: str,
    ) -> Expense | None:
        """Update title/amount/category. Returns None when nothing matched."""
        expense = await self.get_by_owner(owner_id, expense_id)
        if not expense:
            return None
        return await self._apply(
            expense, {"title": title, "amount": amount, "category": category}
        )

    async def delete_owned(self, owner_id: UUID, expense_id: UUID) -> bool:
        expense = await self.get_by_owner(owner_id, expense_id)
        if not expense:
            return False

        await self.db.delete(expense)
        await self.db.commit()
        return True

    async def totals_by_category(self, owner_id: UUID) -> list[tuple[str, Decimal, int]]:
        """Sum and count of the owner's expenses per category, alphabetical."""
        result = await self.db.execute(
            select(
                Expense.category,
                func.sum(Expense.amount),
                func.count(Expense.id),
            )
            .where(Expense.user_id == owner_id)
            .group_by(Expense.category)
            .order_by(Expense.category)
        )
        return [
            (category, Decimal(str(total or 0)).quantize(CENTS), count)
            for category, total, count in result.all()
        ]
