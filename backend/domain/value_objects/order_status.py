"""
OrderStatus Value Object

Immutable representation of an order's lifecycle state.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """
    Order lifecycle state.

    ORDERED -> CANCELED is the only transition.
    """

    ORDERED = "ORDERED"
    CANCELED = "CANCELED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self is OrderStatus.CANCELED

    def can_transition_to(self, new_state: "OrderStatus") -> bool:
        """
        Check if transition to new state is valid.

        Args:
            new_state: Target state

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            OrderStatus.ORDERED: {OrderStatus.CANCELED},
            OrderStatus.CANCELED: set(),
        }
        return OrderStatus(new_state) in valid_transitions[self]
