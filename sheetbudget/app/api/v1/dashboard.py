from fastapi import APIRouter, Depends, Query

from sheetbudget.app.api.deps import require_family_pin
from sheetbudget.app.api.v1.expenses import MONTH_PATTERN
from sheetbudget.app.schemas.dashboard import DashboardResponse
from sheetbudget.app.services.dashboard_service import get_dashboard
from sheetbudget.app.services.record_store import RecordStore, get_record_store

router = APIRouter(dependencies=[Depends(require_family_pin)])

@router.get("/", response_model=DashboardResponse)
def get_dashboard_endpoint(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month (YYYY-MM)"),
    store: RecordStore = Depends(get_record_store)
):
    """
    Budget totals plus category, member and daily breakdowns for a month
    """
    return get_dashboard(store, month)
