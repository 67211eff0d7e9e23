"""Structured logging module.

This module provides utilities for structured logging using structlog and logfire.
"""

from .context import (
    clear_log_context,
    get_log_context,
    log_with_context,
    set_log_context,
    update_log_context,
)
from .setup import get_logger, setup_logging

__all__ = [
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "log_with_context",
    "set_log_context",
    "setup_logging",
    "update_log_context",
]
