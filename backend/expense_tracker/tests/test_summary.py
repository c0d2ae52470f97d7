"""
Tests for the spending summary endpoint.
"""
import pytest
from expense_tracker.models.expense import Expense


def _summary(client, headers, **params):
    response = client.get("/api/expenses/summary/stats", params=params, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_summary_without_expenses(client, auth_headers, categories):
    data = _summary(client, auth_headers)
    assert data["totalSpending"] == 0
    assert data["expenseCount"] == 0
    assert len(data["byCategory"]) == len(categories) == 8
    assert all(item["total"] == 0 for item in data["byCategory"])
    assert {item["name"] for item in data["byCategory"]} == set(categories)


def test_summary_totals(client, auth_headers, categories, create_expense):
    food = categories["Food & Dining"]["id"]
    shopping = categories["Shopping"]["id"]
    create_expense(amount="10.25", category_id=food, date="2024-01-01")
    create_expense(amount="20.50", category_id=food, date="2024-01-02")
    create_expense(amount="5.00", category_id=shopping, date="2024-01-03")

    data = _summary(client, auth_headers)
    assert data["totalSpending"] == pytest.approx(35.75)
    assert data["expenseCount"] == 3

    by_category = data["byCategory"]
    assert by_category[0]["name"] == "Food & Dining"
    assert by_category[0]["total"] == pytest.approx(30.75)
    assert by_category[1]["name"] == "Shopping"
    assert by_category[1]["total"] == pytest.approx(5.0)
    totals = [item["total"] for item in by_category]
    assert totals == sorted(totals, reverse=True)
    assert data["totalSpending"] == pytest.approx(sum(totals))


def test_summary_date_range(client, auth_headers, create_expense):
    create_expense(amount=100, category_id=1, date="2024-01-01")
    create_expense(amount=7, category_id=2, date="2024-02-01")
    create_expense(amount=3, category_id=2, date="2024-02-29")

    data = _summary(client, auth_headers, startDate="2024-02-01", endDate="2024-02-29")
    assert data["totalSpending"] == pytest.approx(10.0)
    assert data["expenseCount"] == 2
    assert data["totalSpending"] == pytest.approx(sum(item["total"] for item in data["byCategory"]))
    food = next(item for item in data["byCategory"] if item["id"] == 1)
    assert food["total"] == 0



def test_summary_reports_expenses_without_category(client, app, auth_headers, create_expense):
    """Spending on rows that lost their category still adds up to the total."""
    kept = create_expense(amount=12, category_id=1, date="2024-01-01")
    orphan = create_expense(amount=8, category_id=4, date="2024-01-02")
    with app.state.db.session() as db:
        db.query(Expense).filter(Expense.id == orphan["id"]).update({"category_id": None})
        db.commit()

    data = _summary(client, auth_headers)
    assert data["totalSpending"] == pytest.approx(20.0)
    assert data["expenseCount"] == 2
    assert data["totalSpending"] == pytest.approx(sum(item["total"] for item in data["byCategory"]))

    uncategorized = [item for item in data["byCategory"] if item["id"] is None]
    assert len(uncategorized) == 1
    assert uncategorized[0]["name"] == "Uncategorized"
    assert uncategorized[0]["total"] == pytest.approx(8.0)
    assert data["byCategory"][0]["id"] == kept["category_id"]
    assert len(data["byCategory"]) == 9

def test_summary_only_counts_own_expenses(client, auth_headers, other_auth_headers, create_expense):
    create_expense(amount=50, category_id=1, date="2024-01-01")
    create_expense(headers=other_auth_headers, amount=70, category_id=1, date="2024-01-01")

    mine = _summary(client, auth_headers)
    theirs = _summary(client, other_auth_headers)
    assert mine["totalSpending"] == pytest.approx(50.0)
    assert theirs["totalSpending"] == pytest.approx(70.0)
    assert mine["expenseCount"] == theirs["expenseCount"] == 1


def test_summary_requires_token(client):
    assert client.get("/api/expenses/summary/stats").status_code == 401
