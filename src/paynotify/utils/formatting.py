from decimal import Decimal
from typing import Any


def format_amount(value: Any, currency_symbol: str = "¥") -> str:
    """Format a payment amount for display, e.g. ``¥1,080``."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float, Decimal)):
        if float(value).is_integer():
            return f"{currency_symbol}{value:,.0f}"
        return f"{currency_symbol}{value:,.2f}"
    return str(value).strip()
