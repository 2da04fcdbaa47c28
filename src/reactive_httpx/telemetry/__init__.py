"""
Telemetry module for reactive-httpx.

Provides structured logging with request-scoped context.
"""

from reactive_httpx.telemetry.logger import (
    JsonFormatter,
    LogContext,
    LogLevel,
    ReactiveHttpxLogger,
    SensitiveDataMasker,
    TextFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "ReactiveHttpxLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
