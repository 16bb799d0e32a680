"""
Record store over a spreadsheet-shaped backing store.

Two logical tables live in the store: the append-only Expense Log and the
Monthly Budget Table. Rows are addressed by position, and positions shift
whenever archival deletes rows, so nothing here caches a row index across
calls. Every backend failure surfaces as StoreUnavailable.
"""
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sheetbudget.app import database
from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.errors import StoreUnavailable
from sheetbudget.app.models.models import (
    ExpenseRow, BudgetRow, EXPENSE_COLUMNS, BUDGET_COLUMNS, EXPENSE_ROW_ATTRS, BUDGET_ROW_ATTRS
)
from sheetbudget.app.schemas.budgets import BudgetRecord
from sheetbudget.app.schemas.expenses import ExpenseRecord
from sheetbudget.app.utils.dates import utc_timestamp
from sheetbudget.app.utils.numbers import parse_number, format_number

logger = logging.getLogger(__name__)

# --- Row conversion ---

def pad_row(row: Sequence[Any], width: int) -> List[str]:
    """Backing stores drop trailing empty cells; put them back as empty strings."""
    cells = ["" if cell is None else str(cell) for cell in row[:width]]
    return cells + [""] * (width - len(cells))

def expense_from_cells(row: Sequence[Any]) -> ExpenseRecord:
    cells = pad_row(row, len(EXPENSE_COLUMNS))
    return ExpenseRecord(
        id=cells[0],
        date=cells[1],
        member_name=cells[2],
        category=cells[3],
        description=cells[4],
        amount=parse_number(cells[5]),
        month=cells[6],
        created_at=cells[7]
    )

def expense_to_cells(expense: ExpenseRecord) -> List[str]:
    return [
        expense.id,
        expense.date,
        expense.member_name,
        expense.category,
        expense.description,
        format_number(expense.amount),
        expense.month,
        expense.created_at
    ]

def budget_from_cells(row: Sequence[Any]) -> BudgetRecord:
    cells = pad_row(row, len(BUDGET_COLUMNS))
    return BudgetRecord(
        month=cells[0],
        total_budget=parse_number(cells[1]),
        total_spent=parse_number(cells[2]),
        remaining_budget=parse_number(cells[3]),
        last_updated=cells[4] or None
    )

def budget_to_cells(budget: BudgetRecord) -> List[str]:
    return [
        budget.month,
        format_number(budget.total_budget),
        format_number(budget.total_spent),
        format_number(budget.remaining_budget),
        budget.last_updated or ""
    ]


class RecordStore(ABC):
    """Expense Log and Monthly Budget Table over one backing store."""

    # --- Backend primitives ---

    @abstractmethod
    def append_expense_row(self, cells: List[str]) -> None:
        ...

    @abstractmethod
    def list_expense_rows(self) -> List[List[str]]:
        """All live Expense Log rows (header excluded), oldest first."""

    @abstractmethod
    def list_budget_rows(self) -> List[List[str]]:
        ...

    @abstractmethod
    def write_budget_row(self, position: Optional[int], cells: List[str]) -> None:
        """Overwrite the budget row at 0-based position, or append when position is None."""

    @abstractmethod
    def delete_row_range(self, start: int, stop: int) -> None:
        """Delete Expense Log data rows [start, stop), 0-based with the header excluded."""

    @abstractmethod
    def raw_slice(self, from_row: int, to_row: int) -> List[List[str]]:
        """Expense Log rows from_row..to_row inclusive, 1-based with the header as row 1."""

    # --- Logical operations ---

    def append_expense(self, expense: ExpenseRecord) -> None:
        self.append_expense_row(expense_to_cells(expense))

    def list_expenses(self) -> List[ExpenseRecord]:
        return [expense_from_cells(row) for row in self.list_expense_rows()]

    def count_expenses(self) -> int:
        return len(self.list_expense_rows())

    def list_budgets(self) -> List[BudgetRecord]:
        return [budget_from_cells(row) for row in self.list_budget_rows()]

    def find_budget(self, month: str) -> Optional[BudgetRecord]:
        for budget in self.list_budgets():
            if budget.month == month:
                return budget
        return None

    def upsert_budget(self, month: str, values: Dict[str, Any]) -> BudgetRecord:
        """
        Write budget fields for a month.

        The row position comes from a fresh scan taken right before the write.
        Fields missing from values keep their stored value, or default to 0 and
        the current timestamp when the month gets a new row.
        """
        budgets = self.list_budgets()
        position = next((i for i, b in enumerate(budgets) if b.month == month), None)

        if position is None:
            current = BudgetRecord(month=month, last_updated=utc_timestamp())
        else:
            current = budgets[position]

        updates = {k: v for k, v in values.items() if k != "month"}
        record = current.model_copy(update=updates)
        logger.debug("Upserting budget %s at position %s: %s", month, position, record)
        self.write_budget_row(position, budget_to_cells(record))
        return record


class SqlRecordStore(RecordStore):
    """Record store kept in two SQLAlchemy tables of text cells."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _remote_call(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store call failed during %s: %s", action, exc)
            raise StoreUnavailable(f"Backing store error during {action}") from exc

    def append_expense_row(self, cells: List[str]) -> None:
        with self._remote_call("append expense"):
            row = ExpenseRow(**dict(zip(EXPENSE_ROW_ATTRS, pad_row(cells, len(EXPENSE_COLUMNS)))))
            self.db.add(row)
            self.db.commit()

    def list_expense_rows(self) -> List[List[str]]:
        with self._remote_call("scan expenses"):
            rows = self.db.query(ExpenseRow).order_by(ExpenseRow.row_key).all()
            return [pad_row(row.cells(), len(EXPENSE_COLUMNS)) for row in rows]

    def count_expenses(self) -> int:
        with self._remote_call("count expenses"):
            return self.db.query(ExpenseRow).count()

    def list_budget_rows(self) -> List[List[str]]:
        with self._remote_call("scan budgets"):
            rows = self.db.query(BudgetRow).order_by(BudgetRow.row_key).all()
            return [pad_row(row.cells(), len(BUDGET_COLUMNS)) for row in rows]

    def write_budget_row(self, position: Optional[int], cells: List[str]) -> None:
        with self._remote_call("write budget"):
            values = dict(zip(BUDGET_ROW_ATTRS, pad_row(cells, len(BUDGET_COLUMNS))))
            if position is None:
                self.db.add(BudgetRow(**values))
            else:
                row = self.db.query(BudgetRow).order_by(BudgetRow.row_key).offset(position).first()
                if row is None:
                    raise StoreUnavailable(f"Budget row {position} vanished before it could be written")
                for attr, value in values.items():
                    setattr(row, attr, value)
            self.db.commit()

    def delete_row_range(self, start: int, stop: int) -> None:
        if start < 0 or stop < start:
            raise ValueError(f"Invalid row range [{start}, {stop})")
        if stop == start:
            return
        with self._remote_call("delete expense rows"):
            keys = [
                key for (key,) in self.db.query(ExpenseRow.row_key)
                .order_by(ExpenseRow.row_key)
                .offset(start)
                .limit(stop - start)
                .all()
            ]
            if keys:
                self.db.query(ExpenseRow).filter(ExpenseRow.row_key.in_(keys)).delete(synchronize_session=False)
            self.db.commit()

    def raw_slice(self, from_row: int, to_row: int) -> List[List[str]]:
        rows: List[List[str]] = []
        if to_row < from_row or to_row < 1:
            return rows
        if from_row <= 1:
            rows.append(list(EXPENSE_COLUMNS))
        first = max(from_row, 2) - 2
        last = to_row - 2
        if last < first:
            return rows
        with self._remote_call("export expense rows"):
            data = (
                self.db.query(ExpenseRow)
                .order_by(ExpenseRow.row_key)
                .offset(first)
                .limit(last - first + 1)
                .all()
            )
            rows.extend(pad_row(row.cells(), len(EXPENSE_COLUMNS)) for row in data)
        return rows


@contextmanager
def open_record_store(settings: Optional[Settings] = None) -> Iterator[RecordStore]:
    """Yield the record store configured by store_backend."""
    settings = settings or get_settings()
    if settings.store_backend == "google_sheets":
        from sheetbudget.app.services.sheets_store import build_sheets_store
        yield build_sheets_store(settings)
        return

    db = database.SessionLocal()
    try:
        yield SqlRecordStore(db)
    finally:
        db.close()

# Dependency to get the record store
def get_record_store():
    with open_record_store() as store:
        yield store
