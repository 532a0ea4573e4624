"""
Item Service

Catalogue maintenance: registering items and changing their price or stock.
Changes to loaded items are written by the session's dirty checking when
the unit of work commits.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from database import unit_of_work
from exceptions import EntityNotFoundError, ValidationError
from models import Item
from repositories.item_repository import ItemRepository
from services.interfaces import IItemService
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


class ItemService(IItemService):

    def __init__(self, db: Session):
        self.db = db
        self.item_repo = ItemRepository(db)

    @log_operation("save_item")
    def save_item(self, item: Item) -> int:
        with unit_of_work(self.db):
            saved = self.item_repo.save(item)
            item_id = saved.id
        logger.info(f"Saved item {item_id} ({saved.name})")
        return item_id

    @log_operation("update_item")
    def update_item(self, item_id: int, name: str, price: int, stock_quantity: int) -> Item:
        """
        Change an item's name, price and stock in one transaction.

        Existing orders keep the price they were placed at.
        """
        invalid = {
            field: value
            for field, value in (("price", price), ("stock_quantity", stock_quantity))
            if value < 0
        }
        if invalid:
            raise ValidationError("Price and stock must be non-negative", invalid_fields=invalid)

        with unit_of_work(self.db):
            item = self.item_repo.find_one_for_update(item_id)
            if item is None:
                raise EntityNotFoundError("Item", item_id)
            item.name = name
            item.price = price
            item.stock_quantity = stock_quantity
        return item

    def find_items(self) -> List[Item]:
        return self.item_repo.find_all()

    def find_one(self, item_id: int) -> Optional[Item]:
        return self.item_repo.find_one(item_id)
