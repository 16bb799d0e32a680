from sheetbudget.app.schemas.dashboard import DashboardResponse, DailyTotal
from sheetbudget.app.services.aggregation_service import aggregate
from sheetbudget.app.services.budget_service import get_budget_summary
from sheetbudget.app.services.record_store import RecordStore

def get_dashboard(store: RecordStore, month: str) -> DashboardResponse:
    """
    Flat dashboard for one month.

    Spending figures come from a live aggregation rather than the cached
    budget row, so a stale cache never shows up here.
    """
    budget = get_budget_summary(store, month)
    totals = aggregate(store, month)

    return DashboardResponse(
        month=month,
        total_budget=budget.total_budget,
        total_spent=totals.total_spent,
        remaining_budget=budget.total_budget - totals.total_spent,
        category_breakdown=totals.category_breakdown,
        member_breakdown=totals.member_breakdown,
        daily_totals=[DailyTotal(date=day, amount=amount) for day, amount in totals.daily_totals]
    )
