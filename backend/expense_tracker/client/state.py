"""
Client view state.

The current view is a tagged variant (``Unauthenticated``, ``Dashboard``,
``ExpenseList``, ``ExpenseForm``) and ``ClientSession`` owns the only
transitions between them. Listing and summary fetch failures are logged and
leave the previously fetched data in place.
"""
import calendar
import logging
from dataclasses import dataclass, field
from datetime import date as dt_date, timedelta
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union
import httpx
from expense_tracker.client.api import ApiError, ExpenseTrackerClient
from expense_tracker.schemas.category import CategoryResponse
from expense_tracker.schemas.expense import ExpenseResponse, SummaryStatsResponse
from expense_tracker.schemas.user import UserResponse

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "Connection error. Make sure the backend is running."


class InvalidTransition(Exception):
    """A transition was requested from a view that does not allow it."""


class DateFilter(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"

    def date_range(self, today: dt_date) -> Optional[Tuple[dt_date, dt_date]]:
        """Inclusive (start, end) ending today, or None for all time."""
        if self is DateFilter.WEEK:
            return today - timedelta(days=7), today
        if self is DateFilter.MONTH:
            return _one_month_before(today), today
        return None


def _one_month_before(day: dt_date) -> dt_date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return dt_date(year, month, min(day.day, last_day))


@dataclass(frozen=True)
class ExpenseFormValues:
    amount: str = ""
    description: str = ""
    category_id: Optional[int] = None
    date: Optional[dt_date] = None

    @classmethod
    def blank(cls, today: dt_date) -> "ExpenseFormValues":
        return cls(date=today)

    @classmethod
    def from_expense(cls, expense: ExpenseResponse) -> "ExpenseFormValues":
        return cls(
            amount=str(expense.amount),
            description=expense.description,
            category_id=expense.category_id,
            date=expense.date,
        )

    def payload(self) -> dict:
        """Request body for create/update. Update is a full replace, so every field is sent."""
        return {
            "amount": self.amount or None,
            "description": self.description,
            "category_id": self.category_id,
            "date": self.date.isoformat() if self.date else None,
        }


@dataclass(frozen=True)
class Unauthenticated:
    is_login: bool = True
    error: Optional[str] = None


@dataclass(frozen=True)
class Dashboard:
    pass


@dataclass(frozen=True)
class ExpenseList:
    pass


@dataclass(frozen=True)
class ExpenseForm:
    editing: Optional[ExpenseResponse] = None
    values: ExpenseFormValues = field(default_factory=ExpenseFormValues)


View = Union[Unauthenticated, Dashboard, ExpenseList, ExpenseForm]


class ClientSession:
    """Session token, current view and the entities fetched for it."""

    def __init__(self, api: ExpenseTrackerClient, today: Callable[[], dt_date] = dt_date.today):
        self.api = api
        self._today = today
        self.user: Optional[UserResponse] = None
        self.view: View = Unauthenticated()
        self.date_filter = DateFilter.ALL
        self.expenses: List[ExpenseResponse] = []
        self.categories: List[CategoryResponse] = []
        self.summary: Optional[SummaryStatsResponse] = None

    @property
    def token(self) -> Optional[str]:
        return self.api.token

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _require_auth(self) -> None:
        if not self.is_authenticated:
            raise InvalidTransition("Not logged in")

    # Unauthenticated view

    def toggle_auth_mode(self, is_login: bool) -> None:
        if not isinstance(self.view, Unauthenticated):
            raise InvalidTransition("Already logged in")
        self.view = Unauthenticated(is_login=is_login)

    def submit_auth(self, email: str, password: str, name: str = "") -> bool:
        """Log in or register depending on the form mode. Errors stay on the form."""
        if not isinstance(self.view, Unauthenticated):
            raise InvalidTransition("Already logged in")
        is_login = self.view.is_login
        try:
            if is_login:
                self.user = self.api.login(email, password)
            else:
                self.user = self.api.register(email, password, name)
        except ApiError as e:
            self.view = Unauthenticated(is_login=is_login, error=e.message)
            return False
        except httpx.HTTPError as e:
            logger.error(f"Auth request failed: {e}")
            self.view = Unauthenticated(is_login=is_login, error=CONNECTION_ERROR)
            return False

        self.view = Dashboard()
        self.refresh()
        return True

    def logout(self) -> None:
        self.api.logout()
        self.user = None
        self.expenses = []
        self.categories = []
        self.summary = None
        self.date_filter = DateFilter.ALL
        self.view = Unauthenticated()

    # Navigation

    def show_dashboard(self) -> None:
        self._require_auth()
        self.view = Dashboard()

    def show_expense_list(self) -> None:
        self._require_auth()
        self.view = ExpenseList()

    def start_add(self) -> None:
        self._require_auth()
        self.view = ExpenseForm(values=ExpenseFormValues.blank(self._today()))

    def start_edit(self, expense: ExpenseResponse) -> None:
        self._require_auth()
        self.view = ExpenseForm(editing=expense, values=ExpenseFormValues.from_expense(expense))

    def submit_expense(self, values: ExpenseFormValues) -> bool:
        """Create or update from the form, then return to the dashboard on success."""
        if not isinstance(self.view, ExpenseForm):
            raise InvalidTransition("No expense form open")
        editing = self.view.editing
        try:
            if editing is None:
                self.api.create_expense(values.payload())
            else:
                self.api.update_expense(editing.id, values.payload())
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error saving expense: {e}")
            self.view = ExpenseForm(editing=editing, values=values)
            return False

        self.refresh_expenses()
        self.refresh_summary()
        self.view = Dashboard()
        return True

    def delete_expense(self, expense_id: int) -> bool:
        self._require_auth()
        try:
            self.api.delete_expense(expense_id)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error deleting expense: {e}")
            return False
        self.refresh_expenses()
        self.refresh_summary()
        return True

    def set_date_filter(self, date_filter: DateFilter) -> None:
        self._require_auth()
        self.date_filter = DateFilter(date_filter)
        self.refresh_expenses()
        self.refresh_summary()

    # Fetching

    def current_range(self) -> Tuple[Optional[dt_date], Optional[dt_date]]:
        date_range = self.date_filter.date_range(self._today())
        return date_range if date_range else (None, None)

    def refresh(self) -> None:
        self.refresh_categories()
        self.refresh_expenses()
        self.refresh_summary()

    def refresh_categories(self) -> None:
        try:
            self.categories = self.api.list_categories()
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching categories: {e}")

    def refresh_expenses(self) -> None:
        start_date, end_date = self.current_range()
        try:
            self.expenses = self.api.list_expenses(start_date=start_date, end_date=end_date)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching expenses: {e}")

    def refresh_summary(self) -> None:
        start_date, end_date = self.current_range()
        try:
            self.summary = self.api.summary(start_date=start_date, end_date=end_date)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching summary: {e}")
