"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""Logging infrastructure with correlation IDs.

Every record emitted through the ``dsdocs`` logger carries the correlation ID
of the current thread, so all lines produced while building the docs for one
request can be grouped together. Bearer tokens are redacted from messages.
"""

import json
import logging
import os
import re
import sys
import threading
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from re import Pattern
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Thread-local storage for context data
_context_local = threading.local()

ROOT_LOGGER_NAME = "dsdocs"


class CorrelationIdManager:
    """
    Manages correlation IDs across threads using thread-local storage.
    """

    def get_correlation_id(self) -> str:
        """
        Get the current correlation ID or generate a new one.
        """
        if not getattr(_context_local, "correlation_id", None):
            _context_local.correlation_id = f"dsdocs-{uuid.uuid4()}"
        return _context_local.correlation_id

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set the current correlation ID.
        """
        _context_local.correlation_id = correlation_id

    def clear_correlation_id(self) -> None:
        """
        Clear the current correlation ID.
        """
        if hasattr(_context_local, "correlation_id"):
            delattr(_context_local, "correlation_id")


# Global correlation ID manager instance
correlation_manager = CorrelationIdManager()


class LogRedactor:
    """
    Redacts credentials from log messages.
    """

    def __init__(self) -> None:
        self.patterns: dict[str, Pattern] = {
            "api_key": re.compile(
                r'(api[_-]?key|token)["\']?\s*[:=]\s*["\']?([^"\'&\s]{8,})', re.IGNORECASE
            ),
            "bearer_token": re.compile(
                r'(Authorization|Bearer)["\']?\s*[:=]?\s*["\']?([^"\'&\s]{8,})', re.IGNORECASE
            ),
        }

    def redact(self, message: str) -> str:
        """
        Redact sensitive information from the message.
        """
        if not isinstance(message, str):
            return message

        for pattern in self.patterns.values():
            # Keep the key but redact the value
            message = pattern.sub(r"\1: [REDACTED]", message)
        return message


# Global redactor instance
redactor = LogRedactor()


class ContextFilter(logging.Filter):
    """
    Adds the correlation ID to records and redacts their message.
    """

    def __init__(self, include_correlation_id: bool = True) -> None:
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if self.include_correlation_id:
            record.correlation_id = correlation_manager.get_correlation_id()
        if isinstance(record.msg, str):
            record.msg = redactor.redact(record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs log records as JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        if getattr(record, "context_data", None):
            log_data["context"] = record.context_data

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str)


class RichContextFormatter(logging.Formatter):
    """
    Formatter for Rich console output with context data.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)

        if getattr(record, "context_data", None):
            context_str = " ".join(f"[{k}={v}]" for k, v in record.context_data.items())
            message = f"{message} {context_str}"

        if hasattr(record, "correlation_id"):
            message = f"{message} [correlation_id={record.correlation_id}]"

        return message


@contextmanager
def log_operation(
    logger: logging.Logger,
    operation_name: str,
    level: int = logging.INFO,
    context: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """
    Context manager for logging operations with timing and context tracking.

    Args:
    ----
        logger: The logger instance to use
        operation_name: Name of the operation being performed
        level: Log level to use
        context: Additional context data to include in the logs

    Yields:
    ------
        The context dict, so callers can add details before completion is logged

    Raises:
    ------
        Exception: Re-raises any exception that occurs within the context

    """
    start_time = time.time()
    context = dict(context or {})
    context["operation_id"] = str(uuid.uuid4())[:8]

    logger.log(level, f"Starting {operation_name}", extra={"context_data": context})

    try:
        yield context
    except Exception as e:
        duration = time.time() - start_time
        error_context = {
            **context,
            "error_type": type(e).__name__,
            "error": str(e),
            "duration": f"{duration:.2f}s",
        }
        logger.error(
            f"Failed {operation_name} after {duration:.2f}s",
            extra={"context_data": error_context},
        )
        raise

    duration = time.time() - start_time
    logger.log(
        level,
        f"Completed {operation_name} in {duration:.2f}s",
        extra={"context_data": context},
    )


@contextmanager
def correlation_id(correlation_id: str | None = None) -> Iterator[str]:
    """
    Context manager for setting a correlation ID for the current context.

    Args:
    ----
        correlation_id: ID to use, or None to generate a new one

    Yields:
    ------
        str: The current correlation ID (either provided or generated)

    """
    previous_id = getattr(_context_local, "correlation_id", None)

    correlation_manager.set_correlation_id(correlation_id or f"dsdocs-{uuid.uuid4()}")

    try:
        yield correlation_manager.get_correlation_id()
    finally:
        # Restore previous correlation ID
        if previous_id:
            correlation_manager.set_correlation_id(previous_id)
        else:
            correlation_manager.clear_correlation_id()


def configure_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    json_format: bool = False,
    include_timestamp: bool = True,
    use_rich: bool = True,
    include_correlation_id: bool = True,
    debug: bool = False,
) -> None:
    """
    Configure the ``dsdocs`` logger.

    Args:
    ----
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL or integer)
        log_file: Optional path to log file
        json_format: Whether to use JSON format for logs
        include_timestamp: Whether to include timestamps in logs
        use_rich: Whether to use Rich for console output
        include_correlation_id: Whether to stamp records with the correlation ID
        debug: Whether to force debug mode

    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if debug:
        level = logging.DEBUG

    format_str = (
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        if include_timestamp
        else "[%(levelname)s] %(name)s: %(message)s"
    )

    handlers: list[logging.Handler] = []

    # Console handler
    if use_rich and not json_format:
        rich_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
        )
        rich_handler.setFormatter(RichContextFormatter("%(message)s"))
        handlers.append(rich_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            JSONFormatter() if json_format else logging.Formatter(format_str)
        )
        handlers.append(console_handler)

    # File handler if requested
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            JSONFormatter() if json_format else logging.Formatter(format_str)
        )
        handlers.append(file_handler)

    context_filter = ContextFilter(include_correlation_id=include_correlation_id)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers and add our configured ones
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        handler.addFilter(context_filter)
        logger.addHandler(handler)

    logger.debug(f"Logging configured with level {logging.getLevelName(level)}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the ``dsdocs`` namespace.

    Args:
    ----
        name: Name of the logger, typically __name__

    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
