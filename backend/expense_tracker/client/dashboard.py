"""
Dashboard projections: stats cards, chart series and recent expenses.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence
from expense_tracker.schemas.expense import ExpenseResponse, SummaryStatsResponse

# Color palette for charts
COLORS = ["#3b82f6", "#ef4444", "#10b981", "#f59e0b", "#8b5cf6", "#ec4899", "#14b8a6", "#6366f1"]

RECENT_LIMIT = 5


@dataclass(frozen=True)
class StatsCards:
    total_spending: float
    expense_count: int
    average_expense: float


@dataclass(frozen=True)
class ChartPoint:
    name: str
    icon: Optional[str]
    total: float
    color: str


def stats_cards(summary: SummaryStatsResponse) -> StatsCards:
    average = summary.total_spending / summary.expense_count if summary.expense_count else 0.0
    return StatsCards(
        total_spending=round(summary.total_spending, 2),
        expense_count=summary.expense_count,
        average_expense=round(average, 2),
    )


def category_chart(summary: SummaryStatsResponse) -> List[ChartPoint]:
    """Categories with spending, in summary order, each with a palette color.

    Both the bar and the pie chart are drawn from this series.
    """
    spent = [item for item in summary.by_category if item.total > 0]
    return [
        ChartPoint(name=item.name, icon=item.icon, total=item.total, color=COLORS[index % len(COLORS)])
        for index, item in enumerate(spent)
    ]


def recent_expenses(expenses: Sequence[ExpenseResponse], limit: int = RECENT_LIMIT) -> List[ExpenseResponse]:
    """Most recent expenses; the API already returns newest first."""
    return list(expenses[:limit])
