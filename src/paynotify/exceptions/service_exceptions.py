"""
Configuration and external collaborator exceptions.
"""

from paynotify.exceptions.base_exceptions import (
    ExceptionCode,
    ExternalServiceException,
    SystemException,
)


class ConfigurationError(SystemException):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=f"Configuration error: {message}",
            code=ExceptionCode.CONFIGURATION_ERROR,
            details=details or {},
        )


class TemplateNotFoundError(SystemException):
    """Raised when the data sheet or the notification template is missing."""

    def __init__(self, sheet_name: str, spreadsheet_id: str = None):
        super().__init__(
            message=f"Sheet not found: {sheet_name!r}",
            code=ExceptionCode.CONFIGURATION_ERROR,
            details={"sheet_name": sheet_name, "spreadsheet_id": spreadsheet_id},
        )


class RenderError(ExternalServiceException):
    """Raised when a notification PDF could not be produced."""

    def __init__(
        self,
        message: str,
        status_code: int = None,
        original_exception: Exception = None,
    ):
        super().__init__(
            message=message,
            code=ExceptionCode.EXTERNAL_API_ERROR,
            details={"status_code": status_code},
            original_exception=original_exception,
        )


class SheetsApiError(ExternalServiceException):
    """Raised when a Google Sheets API call fails."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(
            message=message,
            code=ExceptionCode.EXTERNAL_API_ERROR,
            original_exception=original_exception,
        )


class DocumentStorageError(ExternalServiceException):
    """Raised when a document store operation fails."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(
            message=message,
            code=ExceptionCode.EXTERNAL_API_ERROR,
            original_exception=original_exception,
        )


class MessageDeliveryError(ExternalServiceException):
    """Raised when a notification email could not be sent."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(
            message=message,
            code=ExceptionCode.EXTERNAL_SERVICE_UNAVAILABLE,
            original_exception=original_exception,
        )

