"""
Archival of old expenses.

When the live Expense Log reaches max_rows, the oldest archive_chunk rows are
written to a timestamped .xlsx file and then deleted from the log. The chunk
is smaller than the threshold so an archival run leaves headroom instead of
re-triggering on the next insert.

Archival is maintenance work: failures are logged and swallowed, never
raised to the request that triggered the check.
"""
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.errors import ArchivalFailure
from sheetbudget.app.models.models import EXPENSE_COLUMNS
from sheetbudget.app.services.record_store import RecordStore, open_record_store, pad_row

logger = logging.getLogger(__name__)

ARCHIVE_SHEET_TITLE = "Archived Expenses"

# Held while a background run is in flight; later triggers skip instead of queueing
_archival_in_flight = threading.Lock()

def _archive_path(archive_dir: Path) -> Path:
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
    path = archive_dir / f"archive_expenses_{stamp}.xlsx"
    suffix = 1
    while path.exists():
        path = archive_dir / f"archive_expenses_{stamp}_{suffix}.xlsx"
        suffix += 1
    return path

def write_archive(rows: Sequence[Sequence[str]], archive_dir) -> Path:
    """Write the Expenses header plus rows to a new archive workbook and return its path."""
    archive_dir = Path(archive_dir)
    archive_dir.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = ARCHIVE_SHEET_TITLE
    for row_idx, row in enumerate([EXPENSE_COLUMNS, *rows], start=1):
        for col_idx, value in enumerate(row, start=1):
            if isinstance(value, str):
                # Control characters cannot be stored in xlsx
                value = ILLEGAL_CHARACTERS_RE.sub("", value)
            cell = sheet.cell(row=row_idx, column=col_idx, value=value)
            if isinstance(value, str) and value.startswith("="):
                # Keep text verbatim instead of letting it become a formula
                cell.data_type = "s"

    path = _archive_path(archive_dir)
    workbook.save(path)
    return path

def read_archive(path) -> List[List[str]]:
    """Read an archive back as rows of strings, header first."""
    workbook = load_workbook(path, read_only=True)
    try:
        sheet = workbook[ARCHIVE_SHEET_TITLE]
        return [pad_row(row, len(EXPENSE_COLUMNS)) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

def perform_archival(store: RecordStore, settings: Settings) -> Optional[Path]:
    count_to_archive = settings.archive_chunk

    # Oldest rows sit right under the header: sheet rows 2 .. chunk + 1
    logger.info("[Archival] Fetching %s rows...", count_to_archive)
    rows = store.raw_slice(2, count_to_archive + 1)
    if not rows:
        logger.warning("[Archival] No data found to archive.")
        return None

    try:
        path = write_archive(rows, settings.archive_dir)
    except (OSError, ValueError) as exc:
        raise ArchivalFailure(f"Could not write archive file: {exc}") from exc
    logger.info("[Archival] Saved %s rows to %s", len(rows), path)

    # Only the rows that made it into the file are removed
    logger.info("[Archival] Deleting %s rows from the live log...", len(rows))
    store.delete_row_range(0, len(rows))

    logger.info("[Archival] Process complete.")
    return path

def check_and_archive(store: RecordStore, settings: Optional[Settings] = None) -> Optional[Path]:
    """
    Archive the oldest chunk if the live log has reached the threshold.

    Returns the archive path, or None when nothing was archived or the run failed.
    """
    settings = settings or get_settings()
    try:
        current_count = store.count_expenses()
        logger.info("[Archival] Current row count: %s", current_count)
        if current_count < settings.max_rows:
            return None

        logger.info("[Archival] Threshold %s reached. Initiating archival...", settings.max_rows)
        return perform_archival(store, settings)
    except Exception as exc:
        logger.exception("[Archival] Error checking/archiving: %s", exc)
        return None

def schedule_archival(settings: Optional[Settings] = None) -> Optional[Path]:
    """
    Background-task entry point run after an expense insert.

    Opens its own store, since the request's store is closed by the time this
    runs. Skips the check when another run in this process has not finished.
    """
    if not _archival_in_flight.acquire(blocking=False):
        logger.info("[Archival] Run already in progress, skipping this trigger.")
        return None
    try:
        settings = settings or get_settings()
        with open_record_store(settings) as store:
            return check_and_archive(store, settings)
    except Exception as exc:
        logger.exception("[Archival] Could not open the record store: %s", exc)
        return None
    finally:
        _archival_in_flight.release()
