"""
Order Query DTOs

Report shapes for orders and their lines, kept separate from the mutable
Order aggregate.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Sequence, Tuple

from domain.value_objects import Address, OrderStatus


class OrderItemQueryDto(BaseModel):
    """
    One order line as seen by reports.

    order_id is the grouping key used to attach lines to their order.
    """

    order_id: int = Field(description="Order the line belongs to")
    item_name: str = Field(description="Name of the ordered item")
    order_price: int = Field(description="Unit price at order time")
    count: int = Field(description="Ordered quantity")

    @property
    def total_price(self) -> int:
        return self.order_price * self.count

    class Config:
        """Pydantic configuration."""
        frozen = True


class OrderQueryDto(BaseModel):
    """
    An order joined with its member and delivery.

    order_items is empty until a query repository attaches the lines, and
    stays empty for orders without lines.
    """

    order_id: int = Field(description="Order ID")
    name: str = Field(description="Name of the ordering member")
    order_date: datetime = Field(description="When the order was placed")
    order_status: OrderStatus = Field(description="Current order status")
    address: Optional[Address] = Field(None, description="Delivery address")
    order_items: Tuple[OrderItemQueryDto, ...] = Field((), description="Order lines")

    def with_order_items(self, order_items: Sequence[OrderItemQueryDto]) -> "OrderQueryDto":
        """Return a copy carrying order_items"""
        return self.model_copy(update={"order_items": tuple(order_items)})

    class Config:
        """Pydantic configuration."""
        frozen = True
