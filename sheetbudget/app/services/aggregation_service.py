from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from sheetbudget.app.models.models import Category
from sheetbudget.app.schemas.expenses import ExpenseRecord
from sheetbudget.app.services.record_store import RecordStore
from sheetbudget.app.utils.dates import date_sort_key

UNKNOWN_MEMBER = "Unknown"

@dataclass
class MonthAggregate:
    month: str
    total_spent: float = 0
    category_breakdown: Dict[str, float] = field(default_factory=dict)
    member_breakdown: Dict[str, float] = field(default_factory=dict)
    daily_totals: List[Tuple[str, float]] = field(default_factory=list)

def summarize_rows(expenses: Iterable[ExpenseRecord], month: str) -> MonthAggregate:
    """Totals and breakdowns for one month; month is matched as an exact string."""
    result = MonthAggregate(month=month)
    daily: Dict[str, float] = {}

    for expense in expenses:
        if expense.month != month:
            continue
        amount = expense.amount
        category = expense.category or Category.OTHER.value
        member = expense.member_name or UNKNOWN_MEMBER

        result.total_spent += amount
        result.category_breakdown[category] = result.category_breakdown.get(category, 0) + amount
        result.member_breakdown[member] = result.member_breakdown.get(member, 0) + amount
        if expense.date:
            daily[expense.date] = daily.get(expense.date, 0) + amount

    # Calendar order, not string order: 2/1/2024 comes before 10/1/2024
    result.daily_totals = [(day, daily[day]) for day in sorted(daily, key=date_sort_key)]
    return result

def aggregate(store: RecordStore, month: str) -> MonthAggregate:
    """Scan the whole live Expense Log and aggregate one month. Read-only."""
    return summarize_rows(store.list_expenses(), month)
