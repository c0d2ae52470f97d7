"""
Tests for the API client and the client view-state machine, driven against the app.
"""
from datetime import date
import httpx
import pytest
from expense_tracker.client import (
    ApiError, ClientSession, Dashboard, DateFilter, ExpenseForm, ExpenseFormValues,
    ExpenseList, ExpenseTrackerClient, InvalidTransition, Unauthenticated
)
from expense_tracker.client.dashboard import category_chart, recent_expenses, stats_cards, COLORS

TODAY = date(2024, 3, 31)


@pytest.fixture
def api(client):
    return ExpenseTrackerClient(http=client)


@pytest.fixture
def session(api):
    return ClientSession(api, today=lambda: TODAY)


def _login_new_user(session, email="carol@example.com"):
    session.toggle_auth_mode(is_login=False)
    assert session.submit_auth(email, "pa55word", name="Carol")


def test_date_filter_ranges():
    assert DateFilter.ALL.date_range(TODAY) is None
    assert DateFilter.WEEK.date_range(TODAY) == (date(2024, 3, 24), TODAY)
    # Clamped to the last day of February
    assert DateFilter.MONTH.date_range(TODAY) == (date(2024, 2, 29), TODAY)
    assert DateFilter.MONTH.date_range(date(2024, 1, 15)) == (date(2023, 12, 15), date(2024, 1, 15))


def test_api_client_roundtrip(api):
    user = api.register("dave@example.com", "secret", "Dave")
    assert user.email == "dave@example.com"
    assert api.token

    categories = api.list_categories()
    created = api.create_expense({"amount": "12.00", "category_id": categories[0].id, "date": "2024-01-01"})
    assert api.get_expense(created.id).description == ""
    assert [e.id for e in api.list_expenses(start_date=date(2024, 1, 1), end_date=date(2024, 1, 1))] == [created.id]
    assert api.summary().expense_count == 1

    api.delete_expense(created.id)
    with pytest.raises(ApiError) as excinfo:
        api.get_expense(created.id)
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Expense not found"


def test_api_client_without_token(api):
    with pytest.raises(ApiError) as excinfo:
        api.list_expenses()
    assert excinfo.value.status_code == 401
    assert api.health()["status"] == "ok"


def test_starts_unauthenticated(session):
    assert session.view == Unauthenticated()
    assert not session.is_authenticated
    with pytest.raises(InvalidTransition):
        session.show_dashboard()


def test_login_error_is_shown_on_form(session):
    assert not session.submit_auth("nobody@example.com", "wrong")
    assert session.view == Unauthenticated(is_login=True, error="Invalid email or password")
    assert session.token is None


def test_connection_error_is_shown_on_form():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    api = ExpenseTrackerClient(http=httpx.Client(base_url="http://backend", transport=httpx.MockTransport(refuse)))
    session = ClientSession(api, today=lambda: TODAY)
    assert not session.submit_auth("a@b.c", "pw")
    assert session.view.error.startswith("Connection error")


def test_register_loads_dashboard(session):
    _login_new_user(session)
    assert session.view == Dashboard()
    assert session.user.name == "Carol"
    assert len(session.categories) == 8
    assert session.expenses == []
    assert session.summary.total_spending == 0


def test_add_edit_delete_flow(session):
    _login_new_user(session)

    session.start_add()
    assert isinstance(session.view, ExpenseForm)
    assert session.view.editing is None
    assert session.view.values.date == TODAY

    values = ExpenseFormValues(amount="15.50", description="Taxi", category_id=2, date=TODAY)
    assert session.submit_expense(values)
    assert session.view == Dashboard()
    assert len(session.expenses) == 1
    assert session.summary.total_spending == pytest.approx(15.5)

    expense = session.expenses[0]
    session.start_edit(expense)
    assert session.view.editing == expense
    assert session.view.values.amount == "15.50"
    assert session.submit_expense(ExpenseFormValues(amount="20", description="Taxi", category_id=2, date=TODAY))
    assert session.summary.total_spending == pytest.approx(20.0)

    session.show_expense_list()
    assert session.view == ExpenseList()
    assert session.delete_expense(expense.id)
    assert session.expenses == []
    assert session.summary.expense_count == 0


def test_failed_submit_keeps_form_open(session):
    _login_new_user(session)
    session.start_add()
    values = ExpenseFormValues(amount="", description="nothing", category_id=None, date=TODAY)
    assert not session.submit_expense(values)
    assert isinstance(session.view, ExpenseForm)
    assert session.view.values == values


def test_submit_requires_form(session):
    _login_new_user(session)
    with pytest.raises(InvalidTransition):
        session.submit_expense(ExpenseFormValues())


def test_date_filter_narrows_fetches(session):
    _login_new_user(session)
    session.start_add()
    session.submit_expense(ExpenseFormValues(amount="1", category_id=1, date=date(2024, 3, 30)))
    session.start_add()
    session.submit_expense(ExpenseFormValues(amount="2", category_id=1, date=date(2024, 1, 1)))
    assert len(session.expenses) == 2

    session.set_date_filter(DateFilter.WEEK)
    assert [e.date for e in session.expenses] == [date(2024, 3, 30)]
    assert session.summary.total_spending == pytest.approx(1.0)

    session.set_date_filter(DateFilter.ALL)
    assert len(session.expenses) == 2


def test_logout_clears_state(session):
    _login_new_user(session)
    session.logout()
    assert session.view == Unauthenticated()
    assert session.token is None
    assert session.user is None
    assert session.expenses == [] and session.summary is None


def test_dashboard_projections(session):
    _login_new_user(session)
    for amount, category_id in (("30", 1), ("10", 3), ("20", 1)):
        session.start_add()
        session.submit_expense(ExpenseFormValues(amount=amount, category_id=category_id, date=TODAY))

    cards = stats_cards(session.summary)
    assert cards.total_spending == pytest.approx(60.0)
    assert cards.expense_count == 3
    assert cards.average_expense == pytest.approx(20.0)

    chart = category_chart(session.summary)
    assert [(point.name, point.total) for point in chart] == [("Food & Dining", 50.0), ("Shopping", 10.0)]
    assert [point.color for point in chart] == COLORS[:2]

    assert len(recent_expenses(session.expenses, limit=2)) == 2


def test_stats_cards_with_no_expenses(session):
    _login_new_user(session)
    cards = stats_cards(session.summary)
    assert cards.average_expense == 0.0
    assert category_chart(session.summary) == []
