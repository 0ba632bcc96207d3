"""Pydantic schemas for expense endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

# Stored and validated as Decimal, sent to clients as a JSON number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ExpenseCreate(BaseModel):
    """Request model for adding an expense."""

    title: str = Field(
        ..., max_length=200, description="Short description, at least 2 non-blank characters"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=12,
        decimal_places=2,
        description="Amount spent: greater than 0, at most 2 decimal places and 12 digits",
    )
    category: str = Field(..., max_length=100, description="Category name (non-blank)")

    # Rules are checked on the trimmed text; the value is stored as sent.
    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        if len(value.strip()) < 2:
            raise ValueError("Title must be at least 2 characters.")
        return value

    @field_validator("category")
    @classmethod
    def check_category(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Category is required.")
        return value


class ExpenseUpdate(ExpenseCreate):
    """Request model for updating an expense. Owner and id are immutable."""

    # Anything that is not a UUID is reported as not found, not as bad input.
    id: str | int = Field(..., description="Expense ID")


class ExpenseResponse(BaseModel):
    """Expense data for API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    amount: Money
    category: str
    created_at: datetime
    updated_at: datetime


class CategoryTotal(BaseModel):
    category: str
    total: Money
    count: int


class ExpenseSummary(BaseModel):
    """Spending totals for the dashboard chart."""

    total: Money = Field(description="Sum of all expenses")
    count: int = Field(description="Number of expenses")
    by_category: list[CategoryTotal]
