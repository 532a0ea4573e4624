"""
Order Search DTO
"""

from pydantic import BaseModel, Field, validator
from typing import Optional

from constants import QueryLimits
from domain.value_objects import OrderStatus


class OrderSearch(BaseModel):
    """
    Criteria for searching orders.

    Every criterion is optional; an empty search returns all orders up to
    the limit.
    """

    member_name: Optional[str] = Field(None, description="Fragment of the ordering member's name")
    order_status: Optional[OrderStatus] = Field(None, description="Only orders in this status")
    limit: int = Field(QueryLimits.MAX_ORDER_SEARCH_RESULTS, description="Maximum number of results")

    @validator("limit")
    def validate_limit(cls, v):
        """Ensure limit is within reasonable bounds."""
        if v < 1 or v > QueryLimits.MAX_ORDER_SEARCH_RESULTS:
            raise ValueError(f"Limit must be between 1 and {QueryLimits.MAX_ORDER_SEARCH_RESULTS}")
        return v

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {
            "example": {
                "member_name": "Mon",
                "order_status": "ORDERED",
                "limit": 100
            }
        }
