"""
Status tags shared by the generation and distribution workflows.

The status column is the only coordination point between the two
processes. Values are a closed set; anything else is rejected.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet

from paynotify.exceptions import InvalidStatusTransitionError, UnknownStatusError


class StatusTag(Enum):
    BLANK = ""
    PENDING_APPROVAL = "pending-approval"
    APPROVAL_WARNING = "approval-warning"
    APPROVED = "approved-for-sending"
    SENT = "sent"
    ERROR_PDF_NOT_FOUND = "error-pdf-not-found"
    ERROR_INVALID_DATE = "error-invalid-date"

    @classmethod
    def parse(cls, value: Any, row_number: int = None) -> "StatusTag":
        """Parse a raw cell value, rejecting unrecognized text."""
        text = "" if value is None else str(value)
        if not text.strip():
            return cls.BLANK
        for tag in cls:
            if tag.value == text:
                return tag
        raise UnknownStatusError(text, row_number=row_number)

    @property
    def is_blank(self) -> bool:
        return self is StatusTag.BLANK

    @property
    def is_error(self) -> bool:
        return self in (StatusTag.ERROR_PDF_NOT_FOUND, StatusTag.ERROR_INVALID_DATE)


# Transitions performed by the workflows. Human edits (pending -> approved,
# error -> approved, ...) happen in the sheet and are never written here.
AUTOMATED_TRANSITIONS: Dict[StatusTag, FrozenSet[StatusTag]] = {
    StatusTag.BLANK: frozenset(
        {StatusTag.PENDING_APPROVAL, StatusTag.APPROVAL_WARNING}
    ),
    StatusTag.APPROVED: frozenset(
        {
            StatusTag.SENT,
            StatusTag.ERROR_PDF_NOT_FOUND,
            StatusTag.ERROR_INVALID_DATE,
        }
    ),
    StatusTag.PENDING_APPROVAL: frozenset(),
    StatusTag.APPROVAL_WARNING: frozenset(),
    StatusTag.SENT: frozenset(),
    StatusTag.ERROR_PDF_NOT_FOUND: frozenset(),
    StatusTag.ERROR_INVALID_DATE: frozenset(),
}


def can_transition(current: StatusTag, new: StatusTag) -> bool:
    return new in AUTOMATED_TRANSITIONS[current]


def assert_transition(current: StatusTag, new: StatusTag, row_number: int = None):
    if not can_transition(current, new):
        raise InvalidStatusTransitionError(
            current.value, new.value, row_number=row_number
        )
