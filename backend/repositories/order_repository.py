"""
Order repository for order aggregate data access operations.

Order search supports the Specification Pattern for its filters.
"""

from typing import List, Optional
from sqlalchemy.orm import Session, joinedload

from constants import QueryLimits
from dtos.request import OrderSearch
from models import Member, Order
from .base_repository import BaseRepository
from .order_specifications import spec_for_search
from .specifications import Specification


class OrderRepository(BaseRepository[Order]):
    """Repository for Order model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def find_all(self, order_search: Optional[OrderSearch] = None) -> List[Order]:
        """
        Search orders by member name fragment and status.

        Args:
            order_search: Criteria; None returns every order up to the limit

        Returns:
            Matching orders, ordered by ID, at most order_search.limit rows
        """
        limit = order_search.limit if order_search else QueryLimits.MAX_ORDER_SEARCH_RESULTS
        return self.find_by_spec(spec_for_search(order_search), limit=limit)

    def find_by_spec(self, spec: Specification[Order], limit: Optional[int] = None) -> List[Order]:
        """
        Get orders matching a specification.

        The query joins the ordering member so member criteria can filter.
        """
        query = spec.apply(self.db.query(self.model).join(self.model.member))
        query = query.order_by(self.model.id)
        if limit:
            query = query.limit(limit)
        return query.all()

    def find_all_with_member_delivery(
        self,
        offset: int = 0,
        limit: int = QueryLimits.DEFAULT_PAGE_SIZE
    ) -> List[Order]:
        """
        Get orders with member and delivery loaded in the same query.

        Only the to-one relations are joined, so paging by order stays
        correct; order items load lazily on access.

        Args:
            offset: Number of orders to skip
            limit: Maximum number of orders

        Returns:
            Orders with member and delivery populated
        """
        return self.db.query(self.model).options(
            joinedload(self.model.member),
            joinedload(self.model.delivery)
        ).order_by(self.model.id).offset(offset).limit(limit).all()

    def find_by_member(self, member: Member) -> List[Order]:
        return self.db.query(self.model).filter(
            self.model.member_id == member.id
        ).order_by(self.model.id).all()
