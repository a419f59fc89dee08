"""
Base exception classes for the payment notification system.

Record-level failures derive from ``BusinessException`` or
``ExternalServiceException`` and are absorbed per record by the workflows.
``SystemException`` subclasses abort the step that raised them.
"""

from enum import Enum
from typing import Optional


class ExceptionCode(Enum):
    # Record and status errors (BIZ_XXXX)
    VALIDATION_ERROR = "BIZ_2003"
    INVALID_STATE = "BIZ_2007"
    DUPLICATE_RESOURCE = "BIZ_2008"
    STALE_RECORD = "BIZ_2011"

    # Run-level errors (SYS_XXXX)
    CONFIGURATION_ERROR = "SYS_4001"

    # Google API and mail errors (EXT_XXXX)
    EXTERNAL_API_ERROR = "EXT_5001"
    EXTERNAL_SERVICE_UNAVAILABLE = "EXT_5003"


class PayNotifyException(Exception):
    """Root of all errors raised by the pipeline."""

    def __init__(
        self,
        message: str,
        code: ExceptionCode,
        details: Optional[dict] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code.value
        self.details = details or {}
        self.original_exception = original_exception

    @property
    def row_number(self) -> Optional[int]:
        return self.details.get("row_number")

    def __str__(self):
        return f"[{self.code}] {self.message}"

    def to_dict(self):
        """Flatten the error for structured log output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": (
                f"{type(self.original_exception).__name__}: {self.original_exception}"
                if self.original_exception
                else None
            ),
        }


class BusinessException(PayNotifyException):
    """A record cannot be processed as it stands."""


class SystemException(PayNotifyException):
    """The run cannot continue, usually missing configuration."""


class ExternalServiceException(PayNotifyException):
    """A Google API or mail call failed."""
