from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from sheetbudget.app.api.deps import require_family_pin
from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.schemas.expenses import ExpenseCreate, ExpenseRecord, ExpenseListResponse
from sheetbudget.app.services.archival_service import schedule_archival
from sheetbudget.app.services.budget_service import record_expense
from sheetbudget.app.services.expense_service import list_month_expenses
from sheetbudget.app.services.record_store import RecordStore, get_record_store

router = APIRouter(dependencies=[Depends(require_family_pin)])

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

@router.get("/", response_model=ExpenseListResponse)
def list_expenses_endpoint(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month (YYYY-MM)"),
    store: RecordStore = Depends(get_record_store)
):
    """
    List the live expenses recorded for a month
    """
    return ExpenseListResponse(expenses=list_month_expenses(store, month))

@router.post("/", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED)
def add_expense_endpoint(
    expense_in: ExpenseCreate,
    background_tasks: BackgroundTasks,
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings)
):
    """
    Record an expense and refresh its month's budget.

    - The month is derived from the expense date
    - An archival check runs after the response is sent
    """
    record = record_expense(store, expense_in)
    background_tasks.add_task(schedule_archival, settings)
    return record
