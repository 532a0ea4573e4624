"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

- Address: city/street/zipcode shared by members and deliveries
- OrderStatus: lifecycle of an order
- DeliveryStatus: whether a delivery has shipped
"""

from .address import Address
from .delivery_status import DeliveryStatus
from .order_status import OrderStatus

__all__ = ["Address", "DeliveryStatus", "OrderStatus"]
