from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from database import Base, engine as default_engine
from domain.value_objects import Address
from models import Book, Member
from services.member_service import MemberService
from services.item_service import ItemService
from services.order_service import OrderService

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ('members', 'items', 'deliveries', 'orders', 'order_items')


def init_database(engine: Optional[Engine] = None) -> List[str]:
    """
    Create any missing tables.

    Returns:
        Names of the tables that did not exist before
    """
    engine = engine or default_engine
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)

    created = [table for table in REQUIRED_TABLES if table not in existing]
    if created:
        logger.info(f"✅ Created tables: {', '.join(created)}")
    else:
        logger.info("Database schema already up to date")
    return created


def seed_sample_data(db: Session) -> List[int]:
    """
    Insert two members who each order two books.

    Does nothing if any member already exists.

    Returns:
        IDs of the orders placed
    """
    member_service = MemberService(db)
    if member_service.find_members():
        logger.info("Sample data skipped: members already present")
        return []

    item_service = ItemService(db)
    order_service = OrderService(db)

    samples = [
        ("userA", Address("Seoul", "1 Main St", "1111"),
         [("JPA1 BOOK", 10000, 100, 1), ("JPA2 BOOK", 20000, 100, 2)]),
        ("userB", Address("Busan", "2 Harbor Rd", "2222"),
         [("SPRING1 BOOK", 20000, 200, 3), ("SPRING2 BOOK", 40000, 300, 4)]),
    ]

    order_ids = []
    for name, address, books in samples:
        member_id = member_service.join(Member(name=name, address=address))
        for title, price, stock, count in books:
            item_id = item_service.save_item(Book(name=title, price=price, stock_quantity=stock))
            order_ids.append(order_service.order(member_id, item_id, count))

    logger.info(f"Seeded {len(order_ids)} sample orders")
    return order_ids


def check_schema(engine: Optional[Engine] = None) -> dict:
    """
    Check that every table exists.

    Returns:
        dict: {"valid": bool, "missing_tables": list[str]}
    """
    engine = engine or default_engine
    tables = set(inspect(engine).get_table_names())
    missing = [table for table in REQUIRED_TABLES if table not in tables]
    if missing:
        logger.warning(f"Schema validation failed, missing tables: {missing}")
    return {"valid": not missing, "missing_tables": missing}
