"""Error context management"""

from datetime import UTC, datetime
from types import TracebackType
from typing import Any
from uuid import uuid4

from .base import ApplicationError
from .logging import get_logger

logger = get_logger(__name__)


class ErrorContext:
    """Captures and stores context around an error"""

    def __init__(self, error: Exception, trace_id: str | None = None, **context: Any):
        self.error = error
        self.trace_id = trace_id or str(uuid4())
        self.timestamp = datetime.now(UTC)
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary format with structured details from ApplicationError"""
        result = {
            "error_type": self.error.__class__.__name__,
            "error_message": str(self.error),
            "trace_id": self.trace_id,
            "timestamp": self.timestamp.isoformat(),
        }

        if isinstance(self.error, ApplicationError):
            result["error_code"] = self.error.code.value
            result["error_level"] = self.error.level.value

            # Prefix the details fields to avoid collisions
            for key, value in self.error.details.model_dump().items():
                result[f"details.{key}"] = value

        for key, value in self.context.items():
            result[f"context.{key}"] = value

        return result


class ErrorContextManager:
    """Captures an error context for the duration of a ``with`` block"""

    def __init__(self, error: Exception | None = None, **context: Any) -> None:
        self._contexts: dict[str, ErrorContext] = {}
        self._error = error
        self._context = context
        self._current_context: ErrorContext | None = None

    async def __aenter__(self) -> ErrorContext:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)

    def __enter__(self) -> ErrorContext:
        if self._error is None:
            raise ValueError("No error provided for context")
        self._current_context = ErrorContext(self._error, **self._context)
        self._contexts[self._current_context.trace_id] = self._current_context
        return self._current_context

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Re-raised originals are expected; only report new failures
        if exc_val is not None and exc_val is not self._error:
            logger.error(
                f"Exception during error context handling: {exc_type.__name__}: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb),
            )

    def get_context(self, trace_id: str) -> ErrorContext | None:
        """Retrieve error context by trace ID"""
        return self._contexts.get(trace_id)
