import re
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def parse_number(value: Any) -> float:
    """
    Parse a spreadsheet cell into a number.

    Cells may come back display-formatted ("৳ 50,000", "50,000.00"), so every
    character other than digits, "." and "-" is dropped before parsing.
    Anything that still fails to parse resolves to 0 instead of raising.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if not value:
        return 0
    cleaned = _NON_NUMERIC.sub("", str(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0


def format_number(value: float) -> str:
    """Render a number as a plain cell value; integral values drop the fraction."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
