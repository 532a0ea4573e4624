"""
Query projection DTOs

Flattened, immutable views of orders built straight from join queries.
They are rebuilt on every query call and never written back.
"""

from .order_query_dto import OrderItemQueryDto, OrderQueryDto

__all__ = ["OrderItemQueryDto", "OrderQueryDto"]
