from fastapi import APIRouter, Depends, Query

from sheetbudget.app.api.deps import require_family_pin, require_admin_pin
from sheetbudget.app.api.v1.expenses import MONTH_PATTERN
from sheetbudget.app.schemas.budgets import BudgetSet, BudgetRecord
from sheetbudget.app.services.budget_service import get_budget_summary, set_budget
from sheetbudget.app.services.record_store import RecordStore, get_record_store

router = APIRouter()

@router.get("/", response_model=BudgetRecord, dependencies=[Depends(require_family_pin)])
def get_budget_endpoint(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month (YYYY-MM)"),
    store: RecordStore = Depends(get_record_store)
):
    """
    Get the budget summary for a month (zeros if no budget has been set)
    """
    return get_budget_summary(store, month)

@router.post("/", response_model=BudgetRecord, dependencies=[Depends(require_admin_pin)])
def set_budget_endpoint(
    budget_in: BudgetSet,
    store: RecordStore = Depends(get_record_store)
):
    """
    Create or update the total budget for a month. Admin only.
    """
    return set_budget(store, budget_in.month, budget_in.total_budget)
