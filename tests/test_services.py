from datetime import date

from dhanchakra.domain import Expense
from dhanchakra.insights import FALLBACK_INSIGHT
from dhanchakra.services import DashboardService, InsightService

TODAY = date(2025, 9, 20)


def exp(id, amount, category, d):
    return Expense(id=id, amount=amount, description="x", category=category, date=d)


def test_insight_service_records_every_rule():
    expenses = (exp("1", 850, "Travel", "2025-09-01"),)
    rpt = InsightService().report(expenses, 1000, TODAY)

    assert rpt["total"] == 850
    assert [s["rule"] for s in rpt["steps"]] == [
        "high_category_spending",
        "high_transaction_frequency",
        "budget_progress",
        "small_purchase_pattern",
    ]
    assert [s["fired"] for s in rpt["steps"]] == [True, False, True, False]
    assert [i.title for i in rpt["insights"]] == ["High Category Spending", "Approaching Budget Limit"]


def test_insight_service_custom_rules_and_fallback():
    def never(expenses, total, goal, today, currency):
        return None

    rpt = InsightService(rules=[never]).report((), 1000, TODAY)
    assert rpt["steps"] == [{"rule": "never", "fired": False}]
    assert rpt["insights"] == [FALLBACK_INSIGHT]


def test_dashboard_summary_uses_current_month_for_goal():
    expenses = (
        exp("3", 100, "Food & Dining", "2025-09-15"),
        exp("2", 50, "Food & Dining", "2025-09-02"),
        exp("1", 400, "Travel", "2025-08-10"),
    )
    summary = DashboardService().summary(expenses, balance=1000, goal=1000, today=TODAY)

    assert summary["month_label"] == "September 2025"
    assert summary["total_spent"] == 550
    assert summary["monthly_total"] == 150
    assert summary["count"] == 3
    assert round(summary["average"], 2) == 183.33
    assert summary["balance_left"] == 450
    assert summary["goal"].spent == 150
    assert summary["goal"].remaining == 850
    assert [t.category for t in summary["category_totals"]] == ["Food & Dining", "Travel"]
    assert [b.week for b in summary["weekly"]] == ["2025-08-10", "2025-08-31", "2025-09-14"]
    titles = [i.title for i in summary["insights"]]
    assert titles == ["High Category Spending", "Great Budget Control"]
