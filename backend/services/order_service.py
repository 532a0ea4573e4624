"""
Order Service

Places, cancels and searches orders. Each write runs in its own unit of
work: it commits when the method returns and rolls back everything when
it raises.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from database import unit_of_work
from domain.value_objects import DeliveryStatus
from dtos.request import OrderSearch
from exceptions import EntityNotFoundError, ValidationError
from models import Delivery, Order, OrderItem
from repositories.item_repository import ItemRepository
from repositories.member_repository import MemberRepository
from repositories.order_repository import OrderRepository
from services.interfaces import IOrderService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class OrderService(IOrderService):
    """Service for order placement and cancellation."""

    def __init__(self, db: Session):
        """
        Initialize OrderService.

        Args:
            db: Database session shared by the repositories
        """
        self.db = db
        self.member_repo = MemberRepository(db)
        self.item_repo = ItemRepository(db)
        self.order_repo = OrderRepository(db)

    @log_operation("place_order")
    def order(self, member_id: int, item_id: int, count: int) -> int:
        """
        Place an order for count units of one item.

        The item row is locked before its stock is checked, and the stock
        check happens before anything is written. The order ships to the
        member's address.

        Args:
            member_id: Ordering member
            item_id: Ordered item
            count: Quantity, at least 1

        Returns:
            ID of the new order
        """
        if count < 1:
            raise ValidationError(f"Order count must be positive: {count}", invalid_fields={"count": count})

        with unit_of_work(self.db):
            member = self.member_repo.find_one(member_id)
            if member is None:
                raise EntityNotFoundError("Member", member_id)

            item = self.item_repo.find_one_for_update(item_id)
            if item is None:
                raise EntityNotFoundError("Item", item_id)

            delivery = Delivery(address=member.address, status=DeliveryStatus.READY.value)
            order_item = OrderItem.create_order_item(item, item.price, count)
            order = Order.create_order(member, delivery, order_item)

            self.order_repo.save(order)
            order_id = order.id

        logger.info(f"Order {order_id} placed by member {member_id}: {count} x item {item_id}")
        return order_id

    @log_operation("cancel_order")
    def cancel_order(self, order_id: int) -> None:
        """
        Cancel an order and return every line's quantity to stock.

        Args:
            order_id: Order to cancel
        """
        with unit_of_work(self.db):
            order = self.order_repo.find_one(order_id)
            if order is None:
                raise EntityNotFoundError("Order", order_id)

            # Lock the stock rows being restored
            for order_item in order.order_items:
                self.item_repo.find_one_for_update(order_item.item_id)

            order.cancel()

        logger.info(f"Order {order_id} canceled")

    def find_orders(self, order_search: Optional[OrderSearch] = None) -> List[Order]:
        return self.order_repo.find_all(order_search)

    def find_order(self, order_id: int) -> Optional[Order]:
        return self.order_repo.find_one(order_id)
