"""Record store backed by a Google Sheets spreadsheet (Sheets API v4)."""
import logging
from functools import lru_cache
from typing import List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from sheetbudget.app.config import Settings
from sheetbudget.app.errors import StoreUnavailable
from sheetbudget.app.models.models import SHEET_EXPENSES, SHEET_BUDGETS, EXPENSE_COLUMNS, BUDGET_COLUMNS
from sheetbudget.app.services.record_store import RecordStore, pad_row

logger = logging.getLogger(__name__)

# Scopes for reading and writing to Sheets
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"

EXPENSE_RANGE = f"{SHEET_EXPENSES}!A:H"
BUDGET_RANGE = f"{SHEET_BUDGETS}!A:E"

class GoogleSheetsRecordStore(RecordStore):
    """
    Expense Log and Budget Table as two tabs of one spreadsheet.

    Row 1 of each tab is the header. Data row positions used by the record
    store are 0-based, so position N lives on sheet row N + 2.
    """

    def __init__(self, service, spreadsheet_id: str):
        self.service = service
        self.spreadsheet_id = spreadsheet_id

    def _execute(self, action: str, request):
        try:
            return request.execute()
        except (HttpError, GoogleAuthError, OSError) as exc:
            logger.error("Sheets API call failed during %s: %s", action, exc)
            raise StoreUnavailable(f"Google Sheets error during {action}") from exc

    def _values(self):
        return self.service.spreadsheets().values()

    def _get_values(self, action: str, range_: str) -> List[list]:
        response = self._execute(action, self._values().get(spreadsheetId=self.spreadsheet_id, range=range_))
        return response.get("values", []) or []

    def _append(self, action: str, range_: str, cells: List[str]) -> None:
        self._execute(action, self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=range_,
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [cells]}
        ))

    def append_expense_row(self, cells: List[str]) -> None:
        self._append("append expense", EXPENSE_RANGE, cells)

    def list_expense_rows(self) -> List[List[str]]:
        rows = self._get_values("scan expenses", f"{SHEET_EXPENSES}!A2:H")
        return [pad_row(row, len(EXPENSE_COLUMNS)) for row in rows]

    def list_budget_rows(self) -> List[List[str]]:
        rows = self._get_values("scan budgets", f"{SHEET_BUDGETS}!A2:E")
        return [pad_row(row, len(BUDGET_COLUMNS)) for row in rows]

    def write_budget_row(self, position: Optional[int], cells: List[str]) -> None:
        if position is None:
            self._append("append budget", BUDGET_RANGE, cells)
            return
        row_number = position + 2
        self._execute("update budget", self._values().update(
            spreadsheetId=self.spreadsheet_id,
            range=f"{SHEET_BUDGETS}!A{row_number}:E{row_number}",
            valueInputOption="USER_ENTERED",
            body={"values": [cells]}
        ))

    def _sheet_id(self, title: str) -> int:
        meta = self._execute("read spreadsheet metadata", self.service.spreadsheets().get(
            spreadsheetId=self.spreadsheet_id,
            fields="sheets.properties"
        ))
        for sheet in meta.get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == title:
                return properties["sheetId"]
        raise StoreUnavailable(f"Sheet {title!r} not found in spreadsheet")

    def delete_row_range(self, start: int, stop: int) -> None:
        if start < 0 or stop < start:
            raise ValueError(f"Invalid row range [{start}, {stop})")
        if stop == start:
            return
        # The API counts the header as index 0, so data position N is index N + 1
        request = {
            "deleteDimension": {
                "range": {
                    "sheetId": self._sheet_id(SHEET_EXPENSES),
                    "dimension": "ROWS",
                    "startIndex": start + 1,
                    "endIndex": stop + 1
                }
            }
        }
        self._execute("delete expense rows", self.service.spreadsheets().batchUpdate(
            spreadsheetId=self.spreadsheet_id,
            body={"requests": [request]}
        ))

    def raw_slice(self, from_row: int, to_row: int) -> List[List[str]]:
        if to_row < from_row or to_row < 1:
            return []
        rows = self._get_values("export expense rows", f"{SHEET_EXPENSES}!A{max(from_row, 1)}:H{to_row}")
        return [pad_row(row, len(EXPENSE_COLUMNS)) for row in rows]


@lru_cache()
def _build_service(client_email: str, private_key: str):
    credentials = service_account.Credentials.from_service_account_info(
        {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": TOKEN_URI,
        },
        scopes=SCOPES,
    )
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)

def build_sheets_store(settings: Settings) -> GoogleSheetsRecordStore:
    """Build a store from service-account settings; the API client is reused across calls."""
    if not settings.google_service_account_email or not settings.google_private_key:
        logger.error("Missing Google credentials in settings")
        raise StoreUnavailable("Missing Google Service Account Credentials")
    if not settings.google_sheets_id:
        raise StoreUnavailable("Missing spreadsheet id (GOOGLE_SHEETS_ID)")

    try:
        service = _build_service(settings.google_service_account_email, settings.google_private_key)
    except (ValueError, GoogleAuthError, HttpError, OSError) as exc:
        logger.error("Could not build Sheets client: %s", exc)
        raise StoreUnavailable("Could not connect to Google Sheets") from exc
    return GoogleSheetsRecordStore(service, settings.google_sheets_id)
