"""
HTTP client for the Expense Tracker REST API.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional
import httpx
from expense_tracker.core.config import settings
from expense_tracker.schemas.category import CategoryResponse
from expense_tracker.schemas.expense import ExpenseResponse, SummaryStatsResponse
from expense_tracker.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API, carrying its ``error`` message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _date_params(start_date: Optional[date], end_date: Optional[date]) -> Dict[str, str]:
    params = {}
    if start_date is not None:
        params["startDate"] = start_date.isoformat()
    if end_date is not None:
        params["endDate"] = end_date.isoformat()
    return params


class ExpenseTrackerClient:
    """
    Thin wrapper over the REST endpoints.

    Holds the session token in memory once ``register`` or ``login``
    succeeds and sends it as a bearer token on every protected call.
    Pass ``http`` to reuse an existing ``httpx.Client`` (e.g. a test client).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0
    ):
        self._http = http or httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)
        self.token = token

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, auth: bool = True, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self._http.request(method, path, headers=headers, **kwargs)
        try:
            data = response.json()
        except ValueError:
            data = None
        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase)
        return data

    # Auth

    def _authenticate(self, path: str, payload: Dict[str, str]) -> UserResponse:
        data = self._request("POST", path, auth=False, json=payload)
        self.token = data["token"]
        return UserResponse.model_validate(data["user"])

    def register(self, email: str, password: str, name: str) -> UserResponse:
        return self._authenticate("/api/auth/register", {"email": email, "password": password, "name": name})

    def login(self, email: str, password: str) -> UserResponse:
        return self._authenticate("/api/auth/login", {"email": email, "password": password})

    def logout(self) -> None:
        """Forget the token. Tokens are not revoked server-side."""
        self.token = None

    # Expenses

    def list_expenses(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None
    ) -> List[ExpenseResponse]:
        params = _date_params(start_date, end_date)
        if category_id is not None:
            params["category"] = str(category_id)
        data = self._request("GET", "/api/expenses", params=params)
        return [ExpenseResponse.model_validate(item) for item in data]

    def get_expense(self, expense_id: int) -> ExpenseResponse:
        return ExpenseResponse.model_validate(self._request("GET", f"/api/expenses/{expense_id}"))

    def create_expense(self, payload: Dict[str, Any]) -> ExpenseResponse:
        data = self._request("POST", "/api/expenses", json=payload)
        return ExpenseResponse.model_validate(data["expense"])

    def update_expense(self, expense_id: int, payload: Dict[str, Any]) -> ExpenseResponse:
        data = self._request("PUT", f"/api/expenses/{expense_id}", json=payload)
        return ExpenseResponse.model_validate(data["expense"])

    def delete_expense(self, expense_id: int) -> None:
        self._request("DELETE", f"/api/expenses/{expense_id}")

    def summary(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> SummaryStatsResponse:
        data = self._request("GET", "/api/expenses/summary/stats", params=_date_params(start_date, end_date))
        return SummaryStatsResponse.model_validate(data)

    # Catalog / health

    def list_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(item) for item in self._request("GET", "/api/categories")]

    def health(self) -> Dict[str, str]:
        return self._request("GET", "/health", auth=False)
