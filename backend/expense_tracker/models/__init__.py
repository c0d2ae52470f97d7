"""Models package - Import all models for SQLAlchemy registration."""
from expense_tracker.models.user import User
from expense_tracker.models.category import Category
from expense_tracker.models.expense import Expense

__all__ = [
    "User",
    "Category",
    "Expense",
]
