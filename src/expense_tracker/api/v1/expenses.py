"""Expense endpoints. Every route is scoped to the authenticated user."""

from fastapi import APIRouter, Depends

from expense_tracker.api.deps import CurrentIdentity, get_expense_service
from expense_tracker.schemas.auth import MessageResponse
from expense_tracker.schemas.expense import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseSummary,
    ExpenseUpdate,
)
from expense_tracker.services.expense import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post(
    "/add",
    response_model=ExpenseResponse,
    summary="Add expense",
    responses={400: {"description": "Validation error"}},
)
async def add_expense(
    data: ExpenseCreate,
    identity: CurrentIdentity,
    expense_service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    """
    Create an expense owned by the caller.

    Args:
        data: Title (>= 2 chars), amount (> 0) and category
        identity: Authenticated caller
        expense_service: Expense service

    Returns:
        The created record
    """
    expense = await expense_service.add(
        identity, title=data.title, amount=data.amount, category=data.category
    )
    return ExpenseResponse.model_validate(expense)


@router.get(
    "/all",
    response_model=list[ExpenseResponse],
    summary="List expenses",
)
async def list_expenses(
    identity: CurrentIdentity,
    expense_service: ExpenseService = Depends(get_expense_service),
) -> list[ExpenseResponse]:
    expenses = await expense_service.list_by_owner(identity)
    return [ExpenseResponse.model_validate(expense) for expense in expenses]


@router.get(
    "/summary",
    response_model=ExpenseSummary,
    summary="Spending by category",
    description="Totals per category and overall, as shown on the dashboard chart.",
)
async def expense_summary(
    identity: CurrentIdentity,
    expense_service: ExpenseService = Depends(get_expense_service),
) -> ExpenseSummary:
    return await expense_service.summarize(identity)


@router.put(
    "/update",
    response_model=MessageResponse,
    summary="Update expense",
    responses={404: {"description": "Expense not found"}},
)
async def update_expense(
    data: ExpenseUpdate,
    identity: CurrentIdentity,
    expense_service: ExpenseService = Depends(get_expense_service),
) -> MessageResponse:
    """
    Update title, amount and category of an owned expense.

    Raises:
        404: No expense with that id belongs to the caller
    """
    await expense_service.update(
        identity,
        data.id,
        title=data.title,
        amount=data.amount,
        category=data.category,
    )
    return MessageResponse(message="Expense updated successfully.")


@router.delete(
    "/delete/{expense_id}",
    response_model=MessageResponse,
    summary="Delete expense",
    responses={404: {"description": "Expense not found"}},
)
async def delete_expense(
    expense_id: str,
    identity: CurrentIdentity,
    expense_service: ExpenseService = Depends(get_expense_service),
) -> MessageResponse:
    await expense_service.delete(identity, expense_id)
    return MessageResponse(message="Expense deleted.")
