from paynotify.utils.dates import parse_payment_month
from paynotify.utils.formatting import format_amount

__all__ = ["parse_payment_month", "format_amount"]
