"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""

NOT_ENOUGH_STOCK_MESSAGE = "need more stock"


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotEnoughStockError(ApplicationError):
    """Raised when a stock removal asks for more than is available"""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        details = {"requested": requested, "available": available}
        super().__init__(NOT_ENOUGH_STOCK_MESSAGE, details)


class EntityNotFoundError(ApplicationError):
    """Raised by services when a referenced row does not exist"""

    def __init__(self, entity: str, entity_id: int):
        details = {"entity": entity, "id": entity_id}
        super().__init__(f"{entity} {entity_id} not found", details)


class OrderCancellationError(ApplicationError):
    """Raised when an order cannot be canceled"""

    def __init__(self, order_id: int | None, message: str):
        details = {"order_id": order_id}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class StorageError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
