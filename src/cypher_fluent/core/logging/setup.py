"""Centralized logging setup with Logfire integration.

Logfire is configured via environment variables; this module wires structlog
so that both structlog loggers and standard-library loggers (httpx, for one)
render through the same processor chain.
"""

import logging
import sys

import logfire
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.types import EventDict, Processor, WrappedLogger
from structlog.typing import FilteringBoundLogger

from ..config import settings


def add_error_type(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add the class name of a logged ``error`` value to the event."""
    if "error" in event_dict:
        event_dict["error_type"] = type(event_dict["error"]).__name__

    return event_dict


def setup_logging(level: int | None = None) -> None:
    """Set up application-wide logging with Logfire and structlog integration.

    Logfire is primarily configured via environment variables:
    - LOGFIRE_TOKEN: Authentication token
    - LOGFIRE_SERVICE_NAME: Service name
    - LOGFIRE_ENVIRONMENT: Environment (defaults to "development")

    Args:
        level: Root log level; defaults to DEBUG when ``settings.debug`` is set,
            INFO otherwise.
    """
    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        CallsiteParameterAdder(
            parameters=[
                CallsiteParameter.FILENAME,
                CallsiteParameter.LINENO,
                CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_error_type,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        # Must come before the final renderer
        logfire.StructlogProcessor(),
        structlog.dev.ConsoleRenderer(colors=True),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Use PrintLogger to avoid double logging with standard library
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    # Standard library records go through the same processors, minus Logfire and the renderer
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=True),
        foreign_pre_chain=processors[:-2],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger instance.

    Args:
        name: The name of the logger (usually __name__)

    Returns:
        A configured structlog logger instance
    """
    return structlog.get_logger(name)
