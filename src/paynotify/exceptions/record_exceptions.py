"""
Record and status related exceptions.
"""

from paynotify.exceptions.base_exceptions import BusinessException, ExceptionCode


class UnknownStatusError(BusinessException):
    """Raised when a status cell holds text outside the known tag set."""

    def __init__(self, value: str, row_number: int = None):
        self.value = value
        super().__init__(
            message=f"Unrecognized status tag: {value!r}",
            code=ExceptionCode.VALIDATION_ERROR,
            details={"value": value, "row_number": row_number},
        )


class InvalidStatusTransitionError(BusinessException):
    """Raised when an automated status change is not allowed."""

    def __init__(self, current: str, new: str, row_number: int = None):
        self.current = current
        self.new = new
        super().__init__(
            message=f"Illegal status transition: {current!r} -> {new!r}",
            code=ExceptionCode.INVALID_STATE,
            details={"from": current, "to": new, "row_number": row_number},
        )


class StaleRecordError(BusinessException):
    """Raised when a row's status changed since it was read."""

    def __init__(self, row_number: int, expected: str, actual: str):
        super().__init__(
            message=(
                f"Row {row_number} status changed since it was read "
                f"(expected {expected!r}, found {actual!r})"
            ),
            code=ExceptionCode.STALE_RECORD,
            details={"row_number": row_number, "expected": expected, "actual": actual},
        )


class NamingCollisionError(BusinessException):
    """Raised when both the base and the unique PDF names are already taken."""

    def __init__(self, base_name: str, unique_name: str, folder: str):
        super().__init__(
            message=(
                f"Both {base_name!r} and {unique_name!r} already exist in "
                f"{folder!r}; record left for manual follow-up"
            ),
            code=ExceptionCode.DUPLICATE_RESOURCE,
            details={
                "base_name": base_name,
                "unique_name": unique_name,
                "folder": folder,
            },
        )


class InvalidRecipientError(BusinessException):
    """Raised when a record has no usable recipient address."""

    def __init__(self, row_number: int, value: str):
        super().__init__(
            message=f"Row {row_number} has no valid recipient address: {value!r}",
            code=ExceptionCode.VALIDATION_ERROR,
            details={"row_number": row_number, "value": value},
        )
