"""
Date helpers.

Expense dates are exchanged as DD/MM/YYYY and budget periods as YYYY-MM.
The month key of an expense is always derived from its date here, never
supplied by the caller.
"""
import re
import threading
from datetime import datetime, timezone
from typing import Tuple

DATE_REGEX = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
MONTH_REGEX = re.compile(r"^\d{4}-\d{2}$")
_LOOSE_DATE_REGEX = re.compile(r"^\s*(\d{1,2})/(\d{1,2})/(\d{4})\s*$")

_timestamp_lock = threading.Lock()
_last_timestamp = ""


def is_valid_date(date_str) -> bool:
    if not date_str or not isinstance(date_str, str):
        return False
    match = DATE_REGEX.match(date_str)
    if not match:
        return False
    day, month, year = (int(part) for part in match.groups())
    try:
        datetime(year, month, day)
    except ValueError:
        return False
    return True


def is_valid_month(month_str) -> bool:
    if not month_str or not isinstance(month_str, str):
        return False
    return bool(MONTH_REGEX.match(month_str)) and 1 <= int(month_str[5:]) <= 12


def month_from_date(date_str: str) -> str:
    """Derive the YYYY-MM month key from a DD/MM/YYYY date."""
    match = DATE_REGEX.match(date_str or "")
    if not match:
        raise ValueError(f"Invalid date format: {date_str}. Expected DD/MM/YYYY")
    _, month, year = match.groups()
    return f"{year}-{month}"


def date_sort_key(date_str: str) -> Tuple[int, int, int, str]:
    """
    Calendar ordering key for D/M/YYYY strings, padded or not.

    Unparseable values sort after every real date, among themselves by text.
    """
    match = _LOOSE_DATE_REGEX.match(date_str or "")
    if not match:
        return (10000, 0, 0, date_str or "")
    day, month, year = (int(part) for part in match.groups())
    return (year, month, day, "")


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, never earlier than the previous one."""
    global _last_timestamp
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
    with _timestamp_lock:
        # Fixed-width format, so string comparison is chronological
        if stamp < _last_timestamp:
            stamp = _last_timestamp
        _last_timestamp = stamp
    return stamp
