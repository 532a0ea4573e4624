"""
Factory functions for repositories and services.

Everything is built around an explicit SQLAlchemy session; callers own the
session's lifetime.
"""

from sqlalchemy.orm import Session

from repositories.item_repository import ItemRepository
from repositories.member_repository import MemberRepository
from repositories.order_query_repository import OrderQueryRepository
from repositories.order_repository import OrderRepository
from services.interfaces import IItemService, IMemberService, IOrderService
from services.item_service import ItemService
from services.member_service import MemberService
from services.order_service import OrderService


def get_member_repository(db: Session) -> MemberRepository:
    return MemberRepository(db)


def get_item_repository(db: Session) -> ItemRepository:
    return ItemRepository(db)


def get_order_repository(db: Session) -> OrderRepository:
    return OrderRepository(db)


def get_order_query_repository(db: Session) -> OrderQueryRepository:
    return OrderQueryRepository(db)


def get_member_service(db: Session) -> IMemberService:
    return MemberService(db)


def get_item_service(db: Session) -> IItemService:
    return ItemService(db)


def get_order_service(db: Session) -> IOrderService:
    """
    Factory function for creating OrderService instances.

    Note: Swap in a fake IOrderService here for tests of callers.
    """
    return OrderService(db)
