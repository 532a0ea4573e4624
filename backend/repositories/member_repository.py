"""
Member repository for member-specific data access operations.
"""

from typing import List
from sqlalchemy.orm import Session

from models import Member
from .base_repository import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """Repository for Member model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Member)

    def find_by_name(self, name: str) -> List[Member]:
        """
        Get every member with exactly this name.

        Names are not unique, so this may return several members.

        Args:
            name: Member name

        Returns:
            Matching members, ordered by ID
        """
        return self.db.query(self.model).filter(
            self.model.name == name
        ).order_by(self.model.id).all()
