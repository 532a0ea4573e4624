"""
Order-specific Specifications

Concrete specifications used by the order search. Filters on the member
assume the query already joins Order.member.
"""

from typing import Optional

from dtos.request import OrderSearch
from domain.value_objects import OrderStatus
from models import Member, Order
from .specifications import Specification, all_of


class OrdersByStatusSpec(Specification[Order]):
    """Orders in a specific status."""

    def __init__(self, status: OrderStatus):
        self.status = OrderStatus(status)

    def is_satisfied_by(self, order: Order) -> bool:
        return order.status == self.status

    def to_sql_filter(self):
        return Order.status == self.status.value


class OrdersByMemberNameSpec(Specification[Order]):
    """
    Orders placed by a member whose name contains a fragment.

    The fragment is matched literally: `%` and `_` are escaped in SQL.
    Matching is case-sensitive in memory; in SQL it follows the database's
    LIKE case rules.
    """

    def __init__(self, name_fragment: str):
        self.name_fragment = name_fragment

    def is_satisfied_by(self, order: Order) -> bool:
        return order.member is not None and self.name_fragment in (order.member.name or "")

    def to_sql_filter(self):
        return Member.name.contains(self.name_fragment, autoescape=True)


def spec_for_search(order_search: Optional[OrderSearch]) -> Specification[Order]:
    """
    Build the specification matching an OrderSearch.

    Empty criteria (None or blank name) are left out.
    """
    if order_search is None:
        return all_of([])

    name_spec = None
    if order_search.member_name and order_search.member_name.strip():
        name_spec = OrdersByMemberNameSpec(order_search.member_name.strip())

    status_spec = None
    if order_search.order_status is not None:
        status_spec = OrdersByStatusSpec(order_search.order_status)

    return all_of([name_spec, status_spec])
