"""
Service Interfaces

Abstract base classes for the service layer. Callers depend on these, so a
service can be swapped for a fake in tests.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from dtos.request import OrderSearch
from models import Item, Member, Order


class IMemberService(ABC):
    """Member registration and lookup."""

    @abstractmethod
    def join(self, member: Member) -> int:
        """
        Register a new member.

        Returns:
            ID of the new member

        Raises:
            StorageError: If the member cannot be stored
        """

    @abstractmethod
    def find_members(self) -> List[Member]:
        """Get all members."""

    @abstractmethod
    def find_one(self, member_id: int) -> Optional[Member]:
        """Get a member, or None if it does not exist."""

    @abstractmethod
    def update(self, member_id: int, name: str) -> Member:
        """
        Rename a member.

        Raises:
            EntityNotFoundError: If the member does not exist
        """


class IItemService(ABC):
    """Catalogue maintenance."""

    @abstractmethod
    def save_item(self, item: Item) -> int:
        """Store a new item (or merge a detached one) and return its ID."""

    @abstractmethod
    def update_item(self, item_id: int, name: str, price: int, stock_quantity: int) -> Item:
        """
        Change an item's name, price and stock.

        Raises:
            EntityNotFoundError: If the item does not exist
            ValidationError: If price or stock is negative
        """

    @abstractmethod
    def find_items(self) -> List[Item]:
        """Get all items."""

    @abstractmethod
    def find_one(self, item_id: int) -> Optional[Item]:
        """Get an item, or None if it does not exist."""


class IOrderService(ABC):
    """Order placement, cancellation and search."""

    @abstractmethod
    def order(self, member_id: int, item_id: int, count: int) -> int:
        """
        Place an order for count units of one item.

        Returns:
            ID of the new order

        Raises:
            EntityNotFoundError: If the member or item does not exist
            NotEnoughStockError: If count exceeds the item's stock
            ValidationError: If count is not positive
        """

    @abstractmethod
    def cancel_order(self, order_id: int) -> None:
        """
        Cancel an order and return its stock.

        Raises:
            EntityNotFoundError: If the order does not exist
            OrderCancellationError: If the order was delivered or already canceled
        """

    @abstractmethod
    def find_orders(self, order_search: Optional[OrderSearch] = None) -> List[Order]:
        """Search orders."""
