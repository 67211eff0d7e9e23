"""Base error classes and enums"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Self

from pydantic import BaseModel, Field, field_serializer


class ErrorLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    def to_logging_level(self) -> int:
        """Convert ErrorLevel to logging level"""
        return {
            ErrorLevel.DEBUG: logging.DEBUG,
            ErrorLevel.INFO: logging.INFO,
            ErrorLevel.WARNING: logging.WARNING,
            ErrorLevel.ERROR: logging.ERROR,
            ErrorLevel.CRITICAL: logging.CRITICAL,
        }[self]


class ErrorCode(str, Enum):
    """Error codes for the client."""

    # General Errors (1xxx)
    UNKNOWN = "1000"
    TIMEOUT = "1007"

    # Query Errors (3xxx)
    QUERY_REJECTED = "3002"
    RESULT_SHAPE = "3003"

    # Infrastructure Errors (5xxx)
    SERVICE_UNAVAILABLE = "5002"
    NOT_CONNECTED = "5004"


class ErrorDetails(BaseModel):
    """Base model for structured error details"""

    source: str = Field(description="Component or module where the error occurred")
    operation: str = Field(description="Operation being performed when the error occurred")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(), description="When the error occurred")

    # Ensure timestamp is serialized consistently
    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ServiceErrorDetails(ErrorDetails):
    """Details for errors raised while talking to the graph server"""

    service_name: str = Field(default="graph", description="Name of the service that failed")
    endpoint: str | None = Field(None, description="Service endpoint that was called")
    status_code: int | None = Field(None, description="HTTP status code")
    latency_ms: float | None = Field(None, description="Response time in milliseconds")


class QueryErrorDetails(ServiceErrorDetails):
    """Details for errors tied to a specific Cypher query"""

    query_text: str | None = Field(None, description="Rendered query text")
    server_exception: str | None = Field(None, description="Exception name reported by the server")


class ResultShapeErrorDetails(ErrorDetails):
    """Details for rows that could not be materialized"""

    row_index: int | None = Field(None, description="Index of the offending row")
    column: str | None = Field(None, description="Column being converted")
    expected_type: str | None = Field(None, description="Declared result type")
    actual_value: Any = Field(None, description="Value that failed conversion")


class ApplicationError(Exception):
    """Base class for all client errors"""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        level: ErrorLevel = ErrorLevel.ERROR,
        details: ErrorDetails | dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.level = level

        # Convert dict to ErrorDetails if needed
        if details is None:
            self.details = ErrorDetails(source="unknown", operation="unknown")
        elif isinstance(details, dict):
            details = dict(details)
            source = details.pop("source", "unknown")
            operation = details.pop("operation", "unknown")
            self.details = ErrorDetails(source=source, operation=operation, **details)
        else:
            self.details = details

        super().__init__(message)

    @classmethod
    def with_details(cls, message: str, details: ErrorDetails, **kwargs: Any) -> Self:
        """Create an error with specific details model"""
        return cls(message=message, details=details, **kwargs)
