"""
Item repository for item-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from models import Item
from utils.error_handlers import translate_storage_errors
from .base_repository import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Repository for Item model operations (all variants)."""

    def __init__(self, db: Session):
        super().__init__(db, Item)

    @translate_storage_errors("item save")
    def save(self, item: Item) -> Item:
        """
        Insert a new item, or merge a detached one carrying an ID.

        Args:
            item: Item (or Book/Album/Movie) instance

        Returns:
            The persistent instance; for a merge this is the session's copy,
            not the argument
        """
        if item.id is None:
            self.db.add(item)
            self.db.flush()
            return item

        merged = self.db.merge(item)
        self.db.flush()
        return merged

    def find_one_for_update(self, item_id: int) -> Optional[Item]:
        """
        Load an item for a stock change.

        Locks the row where the dialect supports SELECT ... FOR UPDATE and
        always refreshes the attributes from the database, so the stock
        check sees the committed value even if the item is already in the
        session.

        Args:
            item_id: Item ID

        Returns:
            Item instance or None if not found
        """
        return self.db.query(self.model).populate_existing().with_for_update().filter(
            self.model.id == item_id
        ).first()
