import logging
import threading
from typing import Dict
from uuid import uuid4

from sheetbudget.app.schemas.budgets import BudgetRecord
from sheetbudget.app.schemas.expenses import ExpenseCreate, ExpenseRecord
from sheetbudget.app.services.aggregation_service import aggregate
from sheetbudget.app.services.record_store import RecordStore
from sheetbudget.app.utils.dates import month_from_date, utc_timestamp

logger = logging.getLogger(__name__)

# Serializes read-compute-write cycles for the same month within this process.
# Writers in other processes can still interleave.
_locks_guard = threading.Lock()
_month_locks: Dict[str, threading.RLock] = {}

def _month_lock(month: str) -> threading.RLock:
    with _locks_guard:
        return _month_locks.setdefault(month, threading.RLock())

def recompute_budget(store: RecordStore, month: str) -> BudgetRecord:
    """
    Recalculate total spent and remaining budget for a month from the Expense Log.

    The budget row is a cache: total_budget is kept, the derived fields are
    overwritten with a fresh aggregation. A month with no row gets one with a
    zero allocation.
    """
    with _month_lock(month):
        budget = store.find_budget(month)
        if budget is None:
            logger.info("No budget record for %s, tracking spending against a zero budget", month)
            budget = BudgetRecord(month=month)

        totals = aggregate(store, month)
        remaining = budget.total_budget - totals.total_spent
        logger.info(
            "Recalculated budget for %s: spent %s / budget %s",
            month, totals.total_spent, budget.total_budget
        )

        return store.upsert_budget(month, {
            "total_budget": budget.total_budget,
            "total_spent": totals.total_spent,
            "remaining_budget": remaining,
            "last_updated": utc_timestamp()
        })

def record_expense(store: RecordStore, expense: ExpenseCreate) -> ExpenseRecord:
    """
    Append an expense and refresh its month's budget.

    The append and the recompute are separate writes; if the second one never
    happens the budget row stays stale until the next write for that month.
    """
    record = ExpenseRecord(
        id=str(uuid4()),
        date=expense.date,
        member_name=expense.member_name,
        category=expense.category.value,
        description=expense.description or "",
        amount=expense.amount,
        month=month_from_date(expense.date),
        created_at=utc_timestamp()
    )
    store.append_expense(record)
    logger.info("Recorded expense %s (%s) for %s", record.id, record.amount, record.month)

    recompute_budget(store, record.month)
    return record

def set_budget(store: RecordStore, month: str, total_budget: float) -> BudgetRecord:
    """Set the allocation for a month, creating its row if needed, then recompute."""
    with _month_lock(month):
        existing = store.find_budget(month)
        if existing is None:
            store.upsert_budget(month, {
                "total_budget": total_budget,
                "total_spent": 0,
                "remaining_budget": total_budget,
                "last_updated": utc_timestamp()
            })
        else:
            store.upsert_budget(month, {"total_budget": total_budget, "last_updated": utc_timestamp()})

        # Now trigger a full recalculation so spent is accurate
        return recompute_budget(store, month)

def get_budget_summary(store: RecordStore, month: str) -> BudgetRecord:
    """Budget record for a month, or a zero-valued record when none exists yet."""
    budget = store.find_budget(month)
    if budget is None:
        return BudgetRecord(month=month)
    return budget
