"""
Row selection for the generation and distribution workflows.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List

from paynotify.models import PaymentRecord, Period, StatusTag

# Check column values that mean "no discrepancy"
CLEARED_CHECK_TEXT = frozenset({"", "0", "¥0"})


@dataclass
class GenerationSelection:
    """Disjoint buckets produced by the generation filter."""

    to_process: List[PaymentRecord] = field(default_factory=list)
    warnings: List[PaymentRecord] = field(default_factory=list)


def is_check_cleared(value: Any) -> bool:
    """True when the check column is exactly zero or blank."""
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return value == 0
    return str(value) in CLEARED_CHECK_TEXT


def select_for_generation(
    records: Iterable[PaymentRecord], period: Period
) -> GenerationSelection:
    """
    Split records into those to render and those to flag.

    Only rows in the run's period with a blank status are considered.
    Rows already carrying any status, a prior warning included, are
    left alone.
    """
    selection = GenerationSelection()

    for record in records:
        if not period.contains(record.payment_month):
            continue
        if not record.status.is_blank:
            continue

        if is_check_cleared(record.check_value):
            selection.to_process.append(record)
        else:
            selection.warnings.append(record)

    return selection


def select_for_distribution(records: Iterable[PaymentRecord]) -> List[PaymentRecord]:
    """Rows whose status is exactly the approved tag."""
    return [record for record in records if record.status is StatusTag.APPROVED]
