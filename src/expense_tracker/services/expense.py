"""Expense service: CRUD on expenses owned by the calling user."""

from decimal import Decimal
from uuid import UUID

from expense_tracker.core.exceptions import NotFound, ValidationError
from expense_tracker.core.security import Identity
from expense_tracker.models.expense import Expense
from expense_tracker.repositories.expense import ExpenseRepository
from expense_tracker.schemas.expense import CategoryTotal, ExpenseSummary


def parse_expense_id(raw: str | int | UUID) -> UUID:
    """Parse a client-supplied id; anything unparseable is simply not found."""
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except (TypeError, ValueError) as exc:
        raise NotFound("EXP_001") from exc


def check_expense_fields(title: str, amount: Decimal, category: str) -> None:
    """Business rules for an expense, for callers that bypass the request schema."""
    if len(title.strip()) < 2:
        raise ValidationError(details={"field": "title"})
    if amount <= 0:
        raise ValidationError(details={"field": "amount"})
    if not category.strip():
        raise ValidationError(details={"field": "category"})


class ExpenseService:
    """Every method takes the caller's identity and only touches that user's rows."""

    def __init__(self, expense_repo: ExpenseRepository):
        self.expense_repo = expense_repo

    async def add(
        self, identity: Identity, title: str, amount: Decimal, category: str
    ) -> Expense:
        check_expense_fields(title, amount, category)
        return await self.expense_repo.add(identity.user_id, title, amount, category)

    async def list_by_owner(self, identity: Identity) -> list[Expense]:
        return await self.expense_repo.list_by_owner(identity.user_id)

    async def update(
        self,
        identity: Identity,
        expense_id: str | int | UUID,
        title: str,
        amount: Decimal,
        category: str,
    ) -> Expense:
        """
        Update an owned expense.

        Raises:
            NotFound: If no expense with that id belongs to the caller
        """
        check_expense_fields(title, amount, category)
        expense = await self.expense_repo.update_owned(
            identity.user_id, parse_expense_id(expense_id), title, amount, category
        )
        if expense is None:
            raise NotFound("EXP_001")
        return expense

    async def delete(self, identity: Identity, expense_id: str | int | UUID) -> None:
        """
        Delete an owned expense.

        Raises:
            NotFound: If no expense with that id belongs to the caller
        """
        if not await self.expense_repo.delete_owned(
            identity.user_id, parse_expense_id(expense_id)
        ):
            raise NotFound("EXP_001")

    async def summarize(self, identity: Identity) -> ExpenseSummary:
        rows = await self.expense_repo.totals_by_category(identity.user_id)
        by_category = [
            CategoryTotal(category=category, total=total, count=count)
            for category, total, count in rows
        ]
        return ExpenseSummary(
            total=sum((row.total for row in by_category), Decimal("0.00")),
            count=sum(row.count for row in by_category),
            by_category=by_category,
        )
