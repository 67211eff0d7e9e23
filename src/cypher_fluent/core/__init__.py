from .base import ApplicationError, ErrorCode, ErrorDetails, ErrorLevel
from .errors import (
    AuthoringError,
    DeserializationError,
    NotConnectedError,
    TransportError,
)

__all__ = [
    "ApplicationError",
    "AuthoringError",
    "DeserializationError",
    "ErrorCode",
    "ErrorDetails",
    "ErrorLevel",
    "NotConnectedError",
    "TransportError",
]
