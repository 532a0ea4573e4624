"""
Utility functions and decorators.
"""

from .error_handlers import translate_storage_errors
from .logging_utils import configure_logging, log_operation

__all__ = ["translate_storage_errors", "configure_logging", "log_operation"]
