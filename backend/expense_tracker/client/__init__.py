"""Python client for the Expense Tracker API, with the single-page view state."""
from expense_tracker.client.api import ApiError, ExpenseTrackerClient
from expense_tracker.client.state import (
    ClientSession, DateFilter, Dashboard, ExpenseForm, ExpenseFormValues,
    ExpenseList, InvalidTransition, Unauthenticated
)

__all__ = [
    "ApiError",
    "ExpenseTrackerClient",
    "ClientSession",
    "DateFilter",
    "Dashboard",
    "ExpenseForm",
    "ExpenseFormValues",
    "ExpenseList",
    "InvalidTransition",
    "Unauthenticated",
]
