"""
DeliveryStatus Value Object
"""

from enum import Enum


class DeliveryStatus(str, Enum):
    """READY until shipped, COMP once the delivery is complete."""

    READY = "READY"
    COMP = "COMP"
