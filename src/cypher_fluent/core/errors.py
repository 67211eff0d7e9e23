"""Specific error types for the Cypher client."""

from .base import (
    ApplicationError,
    ErrorCode,
    ErrorDetails,
    ErrorLevel,
    QueryErrorDetails,
    ResultShapeErrorDetails,
    ServiceErrorDetails,
)


class AuthoringError(ApplicationError):
    """The server rejected the query: unbound identifiers, bad syntax, and so on."""

    def __init__(self, message: str, details: QueryErrorDetails | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.QUERY_REJECTED,
            level=ErrorLevel.ERROR,
            details=details or QueryErrorDetails(source="cypher", operation="execute"),
        )

    @property
    def server_exception(self) -> str | None:
        return getattr(self.details, "server_exception", None)


class TransportError(ApplicationError):
    """Network failure or unexpected response status from the graph server."""

    def __init__(
        self,
        message: str,
        details: ServiceErrorDetails | None = None,
        code: ErrorCode = ErrorCode.SERVICE_UNAVAILABLE,
    ):
        super().__init__(
            message=message,
            code=code,
            level=ErrorLevel.ERROR,
            details=details or ServiceErrorDetails(source="transport", operation="request"),
        )

    @property
    def status_code(self) -> int | None:
        return getattr(self.details, "status_code", None)


class DeserializationError(ApplicationError):
    """Response columns or values do not match the declared result shape."""

    def __init__(self, message: str, details: ResultShapeErrorDetails | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.RESULT_SHAPE,
            level=ErrorLevel.ERROR,
            details=details or ResultShapeErrorDetails(source="results", operation="materialize"),
        )


class NotConnectedError(ApplicationError):
    """The client was used before its endpoints were discovered."""

    def __init__(self, message: str, details: ErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.NOT_CONNECTED,
            level=ErrorLevel.WARNING,
            details=details or {"source": "graph_client", "operation": "bootstrap"},
        )
