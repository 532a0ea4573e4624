"""
Error handling decorators for the data access layer.

Repositories wrap their write paths with translate_storage_errors so that
callers see StorageError instead of driver- or ORM-specific exceptions.
"""

from functools import wraps
from typing import Callable
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
import logging

from exceptions import StorageError

logger = logging.getLogger(__name__)


def translate_storage_errors(operation_name: str):
    """
    Decorator converting SQLAlchemy failures into StorageError.

    The session is left for the surrounding unit of work to roll back.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Member save")

    Example:
        @translate_storage_errors("Member save")
        def save(self, member):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except IntegrityError as e:
                logger.warning(f"{operation_name} - Constraint violation: {e.orig}")
                raise StorageError(operation_name, f"Constraint violation: {e.orig}") from e
            except StaleDataError as e:
                logger.warning(f"{operation_name} - Concurrent modification: {e}")
                raise StorageError(operation_name, f"Row was modified concurrently: {e}") from e
            except SQLAlchemyError as e:
                logger.error(f"{operation_name} - Database error: {e}", exc_info=True)
                raise StorageError(operation_name, f"Database operation failed: {e}") from e

        return wrapper

    return decorator
