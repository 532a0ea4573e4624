"""
Logging Utilities

Root logger setup plus helpers for adding structured context to log
messages emitted by services.
"""

import inspect
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps

from config.settings import get_log_dir, get_log_level
from exceptions import ApplicationError


# Context variable for operation-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Arguments copied into the log context when an operation is called with them
CONTEXT_KEYS = ("member_id", "item_id", "order_id", "count")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(log_dir: Optional[Path] = None, level: Optional[int] = None) -> Path:
    """
    Attach a rotating file handler and a stdout handler to the root logger.

    Calling it again for the same log file adds no further handlers.

    Args:
        log_dir: Directory for storefront.log (defaults to STOREFRONT_LOG_DIR)
        level: Root level (defaults to STOREFRONT_LOG_LEVEL)

    Returns:
        Path of the log file
    """
    log_dir = log_dir or get_log_dir()
    level = level if level is not None else get_log_level()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "storefront.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(log_file):
            return log_file

    log_formatter = logging.Formatter(LOG_FORMAT)

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    return log_file


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Order placed", extra={"order_id": order.id})
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current operation.

    Example:
        set_logging_context(request_id="abc-123", member_id=42)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def _bound_context(func, args, kwargs) -> Dict[str, Any]:
    """Pick the CONTEXT_KEYS arguments out of a call, positional or keyword."""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return {}
    return {key: value for key, value in bound.arguments.items() if key in CONTEXT_KEYS}


def log_operation(operation_name: str):
    """
    Decorator to log operation start, completion and failure.

    Business failures (ApplicationError subclasses) are logged at WARNING,
    anything else at ERROR with a traceback. The exception is re-raised.

    Example:
        @log_operation("place_order")
        def order(self, member_id, item_id, count):
            ...
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = {"operation": operation_name}
            context.update(_bound_context(func, args, kwargs))

            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
            except ApplicationError as e:
                context["error"] = e.message
                context["error_type"] = type(e).__name__
                logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
                raise
            except Exception as e:
                context["error"] = str(e)
                context["error_type"] = type(e).__name__
                logger.error(f"Failed {operation_name}", extra=context, exc_info=True)
                raise

            logger.info(f"Completed {operation_name}", extra=context)
            return result

        return wrapper

    return decorator
