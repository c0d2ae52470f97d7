"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from expense_tracker.db.session import get_db
from expense_tracker.core.utils import format_response
from expense_tracker.schemas.expense import (
    ExpenseCreate, ExpenseMessageResponse, ExpenseResponse, MessageResponse, SummaryStatsResponse
)
from expense_tracker.schemas.user import Identity
from expense_tracker.services import expense_service
from expense_tracker.services.expense_service import ExpenseFilters
from expense_tracker.api.dependencies import get_current_user

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    category: Optional[int] = Query(None),
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's expenses, optionally filtered by date range and category."""
    filters = ExpenseFilters(start_date=start_date, end_date=end_date, category_id=category)
    return expense_service.list_expenses(db, current_user.user_id, filters)


# Declared before /{expense_id} so "summary" is never read as an id
@router.get("/summary/stats", response_model=SummaryStatsResponse)
async def get_summary_stats(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Total spending, expense count and per-category totals."""
    filters = ExpenseFilters(start_date=start_date, end_date=end_date)
    return expense_service.summary_stats(db, current_user.user_id, filters)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single expense."""
    return expense_service.get_expense(db, current_user.user_id, expense_id)


@router.post("", response_model=ExpenseMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new expense."""
    expense = expense_service.create_expense(db, current_user.user_id, expense_data)
    return format_response("Expense created successfully", expense=expense)


@router.put("/{expense_id}", response_model=ExpenseMessageResponse)
async def update_expense(
    expense_id: int,
    expense_data: ExpenseCreate,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace all editable fields of an expense."""
    expense = expense_service.update_expense(db, current_user.user_id, expense_id, expense_data)
    return format_response("Expense updated successfully", expense=expense)


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense_service.delete_expense(db, current_user.user_id, expense_id)
    return format_response("Expense deleted successfully")
