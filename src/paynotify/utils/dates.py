"""
Helpers for reading date cells coming back from the sheet.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional

# Day zero of spreadsheet serial dates
SERIAL_EPOCH = date(1899, 12, 30)

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y年%m月%d日",
    "%m/%d/%Y",
    "%Y-%m",
    "%Y/%m",
    "%Y年%m月",
)


def parse_payment_month(value: Any) -> Optional[date]:
    """
    Convert a payment month cell into a date.

    Accepts date/datetime objects, spreadsheet serial numbers and the
    common textual formats. Returns None for anything that is not a
    valid date, including blank cells.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        if value <= 0:
            return None
        try:
            return SERIAL_EPOCH + timedelta(days=int(value))
        except OverflowError:
            return None

    text = str(value).strip()
    if not text:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None
