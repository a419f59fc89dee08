from paynotify.models.payment_record import PaymentRecord
from paynotify.models.period import Period
from paynotify.models.run_summary import Outcome, RunSummary
from paynotify.models.status import (
    AUTOMATED_TRANSITIONS,
    StatusTag,
    assert_transition,
    can_transition,
)

__all__ = [
    "PaymentRecord",
    "Period",
    "RunSummary",
    "Outcome",
    "StatusTag",
    "AUTOMATED_TRANSITIONS",
    "assert_transition",
    "can_transition",
]
