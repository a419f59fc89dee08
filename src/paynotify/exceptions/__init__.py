"""
Exception module for the payment notification system.
Contains custom exceptions for different error types.
"""

from paynotify.exceptions.base_exceptions import (
    BusinessException,
    ExceptionCode,
    ExternalServiceException,
    PayNotifyException,
    SystemException,
)
from paynotify.exceptions.record_exceptions import (
    InvalidRecipientError,
    InvalidStatusTransitionError,
    NamingCollisionError,
    StaleRecordError,
    UnknownStatusError,
)
from paynotify.exceptions.service_exceptions import (
    ConfigurationError,
    DocumentStorageError,
    MessageDeliveryError,
    RenderError,
    SheetsApiError,
    TemplateNotFoundError,
)

__all__ = [
    "PayNotifyException",
    "BusinessException",
    "SystemException",
    "ExternalServiceException",
    "ExceptionCode",
    "UnknownStatusError",
    "InvalidStatusTransitionError",
    "StaleRecordError",
    "NamingCollisionError",
    "InvalidRecipientError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "RenderError",
    "SheetsApiError",
    "DocumentStorageError",
    "MessageDeliveryError",
]
