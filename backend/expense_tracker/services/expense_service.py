"""
Expense service for expense-related business logic.

Every function takes the caller's user id and scopes its query to it, so a
row owned by another user behaves exactly like a missing one.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from expense_tracker.core.exceptions import NotFoundError, ServerError, ValidationError
from expense_tracker.core.utils import utcnow
from expense_tracker.models.category import Category
from expense_tracker.models.expense import Expense
from expense_tracker.schemas.expense import (
    CategoryTotal, ExpenseCreate, ExpenseResponse, SummaryStatsResponse
)
from expense_tracker.services.category_service import category_exists

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


@dataclass
class ExpenseFilters:
    """Optional listing filters. Date bounds are inclusive and independent."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_id: Optional[int] = None

    def predicates(self) -> list:
        """Clauses for the filters that are set, in a fixed order, to be ANDed."""
        clauses = []
        if self.start_date is not None:
            clauses.append(Expense.date >= self.start_date)
        if self.end_date is not None:
            clauses.append(Expense.date <= self.end_date)
        if self.category_id is not None:
            clauses.append(Expense.category_id == self.category_id)
        return clauses


@contextmanager
def _store_errors(db: Session, message: str):
    """Roll back and report store failures as a ServerError with ``message``."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{message}: {e}", exc_info=True)
        raise ServerError(message)


def _to_response(expense: Expense, category_name: Optional[str], category_icon: Optional[str]) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        user_id=expense.user_id,
        category_id=expense.category_id,
        amount=expense.amount,
        description=expense.description or "",
        date=expense.date,
        created_at=expense.created_at,
        updated_at=expense.updated_at,
        category_name=category_name,
        category_icon=category_icon,
    )


def _joined_query(db: Session, user_id: int):
    return db.query(Expense, Category.name, Category.icon).outerjoin(
        Category, Expense.category_id == Category.id
    ).filter(Expense.user_id == user_id)


def _validate_payload(db: Session, data: ExpenseCreate) -> None:
    if data.amount is None or data.category_id is None or data.date is None:
        raise ValidationError("Amount, category, and date are required")
    if not category_exists(db, data.category_id):
        raise ValidationError("Category not found")


def _owned_expense(db: Session, user_id: int, expense_id: int) -> Expense:
    expense = db.query(Expense).filter(
        Expense.id == expense_id,
        Expense.user_id == user_id
    ).first()
    if not expense:
        raise NotFoundError("Expense not found")
    return expense


def list_expenses(db: Session, user_id: int, filters: Optional[ExpenseFilters] = None) -> List[ExpenseResponse]:
    """Caller's expenses, newest date first, then newest created first."""
    filters = filters or ExpenseFilters()
    with _store_errors(db, "Error fetching expenses"):
        rows = _joined_query(db, user_id).filter(*filters.predicates()).order_by(
            Expense.date.desc(),
            Expense.created_at.desc(),
            Expense.id.desc()
        ).all()
    return [_to_response(expense, name, icon) for expense, name, icon in rows]


def get_expense(db: Session, user_id: int, expense_id: int) -> ExpenseResponse:
    with _store_errors(db, "Error fetching expense"):
        row = _joined_query(db, user_id).filter(Expense.id == expense_id).first()
    if not row:
        raise NotFoundError("Expense not found")
    return _to_response(*row)


def create_expense(db: Session, user_id: int, data: ExpenseCreate) -> ExpenseResponse:
    """Store a new expense for the caller. Description defaults to an empty string."""
    _validate_payload(db, data)

    now = utcnow()
    new_expense = Expense(
        user_id=user_id,
        amount=data.amount,
        description=data.description or "",
        category_id=data.category_id,
        date=data.date,
        created_at=now,
        updated_at=now
    )
    with _store_errors(db, "Error creating expense"):
        db.add(new_expense)
        db.commit()
        db.refresh(new_expense)

    logger.debug(f"Created expense {new_expense.id} for user {user_id}")
    return get_expense(db, user_id, new_expense.id)


def update_expense(db: Session, user_id: int, expense_id: int, data: ExpenseCreate) -> ExpenseResponse:
    """Replace amount, description, category and date of an owned expense."""
    with _store_errors(db, "Error updating expense"):
        expense = _owned_expense(db, user_id, expense_id)

    _validate_payload(db, data)

    with _store_errors(db, "Error updating expense"):
        expense.amount = data.amount
        expense.description = data.description or ""
        expense.category_id = data.category_id
        expense.date = data.date
        expense.updated_at = utcnow()
        db.commit()

    return get_expense(db, user_id, expense_id)


def delete_expense(db: Session, user_id: int, expense_id: int) -> None:
    with _store_errors(db, "Error deleting expense"):
        expense = _owned_expense(db, user_id, expense_id)
        db.delete(expense)
        db.commit()
    logger.debug(f"Deleted expense {expense_id} for user {user_id}")


def summary_stats(db: Session, user_id: int, filters: Optional[ExpenseFilters] = None) -> SummaryStatsResponse:
    """
    Spending totals over the caller's expenses in the optional date range.

    Every catalog category gets an entry, zero when nothing matched, sorted
    by total descending. Spending on expenses without a catalog category is
    reported as an extra "Uncategorized" entry when non-zero, so the entries
    always add up to the total. The category filter is ignored here.
    """
    filters = ExpenseFilters(
        start_date=filters.start_date if filters else None,
        end_date=filters.end_date if filters else None,
    )
    predicates = filters.predicates()

    with _store_errors(db, "Error fetching summary"):
        expense_count, total_spending = db.query(
            func.count(Expense.id),
            func.coalesce(func.sum(Expense.amount), 0)
        ).filter(Expense.user_id == user_id, *predicates).one()

        category_total = func.coalesce(func.sum(Expense.amount), 0).label("total")
        category_rows = db.query(
            Category.id, Category.name, Category.icon, category_total
        ).outerjoin(
            Expense,
            and_(Expense.category_id == Category.id, Expense.user_id == user_id, *predicates)
        ).group_by(
            Category.id, Category.name, Category.icon
        ).order_by(category_total.desc(), Category.name).all()

        # Expenses without a category, or whose category row is gone
        uncategorized_total = db.query(
            func.coalesce(func.sum(Expense.amount), 0)
        ).outerjoin(
            Category, Expense.category_id == Category.id
        ).filter(Expense.user_id == user_id, Category.id.is_(None), *predicates).scalar()

    by_category = [
        CategoryTotal(id=cid, name=name, icon=icon, total=float(total or 0))
        for cid, name, icon, total in category_rows
    ]
    if uncategorized_total:
        by_category.append(CategoryTotal(id=None, name=UNCATEGORIZED, icon=None, total=float(uncategorized_total)))
        by_category.sort(key=lambda item: (-item.total, item.name))

    return SummaryStatsResponse(
        total_spending=float(total_spending or 0),
        expense_count=expense_count or 0,
        by_category=by_category,
    )
