"""
Order query repository.

Builds OrderQueryDto reports straight from join queries instead of
loading Order entities. Only to-one relations (member, delivery) are
joined with the order row; joining order_items there would repeat each
order once per line. Lines are fetched separately, either per order
(find_order_query_dtos, 1 + N queries) or for all orders at once
(find_orders_query_dtos_optimize, 2 queries).
"""

from collections import defaultdict
from typing import Dict, List
from sqlalchemy.orm import Session
import logging

from domain.value_objects import Address
from dtos.query import OrderItemQueryDto, OrderQueryDto
from models import Delivery, Item, Member, Order, OrderItem

logger = logging.getLogger(__name__)


class OrderQueryRepository:
    """Read-only projections of orders for reporting."""

    def __init__(self, db: Session):
        self.db = db

    def find_orders(self) -> List[OrderQueryDto]:
        """
        Get every order joined with its member and delivery, without lines.

        Returns:
            One OrderQueryDto per order, ordered by order ID, order_items empty
        """
        rows = self.db.query(
            Order.id,
            Member.name,
            Order.order_date,
            Order.status,
            Delivery.city,
            Delivery.street,
            Delivery.zipcode
        ).join(Order.member).join(Order.delivery).order_by(Order.id).all()

        return [
            OrderQueryDto(
                order_id=order_id,
                name=name,
                order_date=order_date,
                order_status=status,
                address=Address(city, street, zipcode),
            )
            for order_id, name, order_date, status, city, street, zipcode in rows
        ]

    def find_order_items(self, order_id: int) -> List[OrderItemQueryDto]:
        """
        Get the lines of one order joined with their items.

        Args:
            order_id: Order ID

        Returns:
            Lines in insertion order; empty if the order has none
        """
        rows = self._order_item_query().filter(
            OrderItem.order_id == order_id
        ).all()
        return [self._to_item_dto(row) for row in rows]

    def find_order_query_dtos(self) -> List[OrderQueryDto]:
        """
        Get all orders with their lines, one line query per order.

        Issues 1 + N queries for N orders.
        """
        return [
            order.with_order_items(self.find_order_items(order.order_id))
            for order in self.find_orders()
        ]

    def find_orders_query_dtos_optimize(self) -> List[OrderQueryDto]:
        """
        Get all orders with their lines using a single line query.

        Lines for every order are fetched with one IN query and grouped by
        order ID. Produces the same result as find_order_query_dtos with
        two queries in total (one when there are no orders).
        """
        orders = self.find_orders()
        if not orders:
            return []

        order_item_map = self._find_order_item_map(self._order_ids(orders))
        logger.debug(f"Attached lines for {len(orders)} orders from {len(order_item_map)} groups")

        return [
            order.with_order_items(order_item_map.get(order.order_id, []))
            for order in orders
        ]

    def _find_order_item_map(self, order_ids: List[int]) -> Dict[int, List[OrderItemQueryDto]]:
        rows = self._order_item_query().filter(
            OrderItem.order_id.in_(order_ids)
        ).all()

        order_item_map: Dict[int, List[OrderItemQueryDto]] = defaultdict(list)
        for row in rows:
            item_dto = self._to_item_dto(row)
            order_item_map[item_dto.order_id].append(item_dto)
        return dict(order_item_map)

    @staticmethod
    def _order_ids(orders: List[OrderQueryDto]) -> List[int]:
        return [order.order_id for order in orders]

    def _order_item_query(self):
        return self.db.query(
            OrderItem.order_id,
            Item.name,
            OrderItem.order_price,
            OrderItem.count
        ).join(OrderItem.item).order_by(OrderItem.id)

    @staticmethod
    def _to_item_dto(row) -> OrderItemQueryDto:
        order_id, item_name, order_price, count = row
        return OrderItemQueryDto(
            order_id=order_id,
            item_name=item_name,
            order_price=order_price,
            count=count,
        )
