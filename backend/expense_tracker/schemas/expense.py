"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal


class ExpenseCreate(BaseModel):
    """Schema for expense creation and full-replace update.

    Required fields are checked by the service so a missing value answers
    with a 400 and a readable message.
    """
    amount: Optional[Decimal] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    date: Optional[dt_date] = None


class ExpenseResponse(BaseModel):
    """Schema for expense response, joined with its category."""
    id: int
    user_id: int
    category_id: Optional[int] = None
    amount: Decimal
    description: str = ""
    date: dt_date
    created_at: datetime
    updated_at: datetime
    category_name: Optional[str] = None  # None once the category row is gone
    category_icon: Optional[str] = None


class ExpenseMessageResponse(BaseModel):
    """Schema for create/update response."""
    message: str
    expense: ExpenseResponse


class MessageResponse(BaseModel):
    message: str


class CategoryTotal(BaseModel):
    """Spending for one catalog category; id is None for the uncategorized entry."""
    id: Optional[int] = None
    name: str
    icon: Optional[str] = None
    total: float


class SummaryStatsResponse(BaseModel):
    """Schema for the spending summary."""
    model_config = {"populate_by_name": True}

    total_spending: float = Field(alias="totalSpending")
    expense_count: int = Field(alias="expenseCount")
    by_category: List[CategoryTotal] = Field(alias="byCategory")
