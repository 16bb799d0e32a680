from typing import List

from sheetbudget.app.schemas.expenses import ExpenseRecord
from sheetbudget.app.services.record_store import RecordStore

def list_month_expenses(store: RecordStore, month: str) -> List[ExpenseRecord]:
    """Live expenses whose month key equals month, in append order"""
    return [expense for expense in store.list_expenses() if expense.month == month]
