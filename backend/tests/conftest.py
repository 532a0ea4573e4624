import os
import sys
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Keep the module-level engine in memory instead of the user's data directory
os.environ.setdefault('STOREFRONT_DATABASE_URL', 'sqlite://')

# Now import after path is set
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from models import Base, Book, Member
from services.item_service import ItemService
from services.member_service import MemberService
from services.order_service import OrderService


class QueryCounter:
    """Counts SELECT statements sent to the database."""

    def __init__(self):
        self.count = 0

    def reset(self):
        self.count = 0

    def __call__(self, conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            self.count += 1


@pytest.fixture
def engine():
    engine = create_engine('sqlite:///:memory:')
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create in-memory database for testing"""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def query_counter(engine):
    counter = QueryCounter()
    event.listen(engine, "before_cursor_execute", counter)
    yield counter
    event.remove(engine, "before_cursor_execute", counter)


@pytest.fixture
def member_service(db_session):
    return MemberService(db_session)


@pytest.fixture
def item_service(db_session):
    return ItemService(db_session)


@pytest.fixture
def order_service(db_session):
    return OrderService(db_session)


@pytest.fixture
def create_member(member_service, db_session):
    def _create(name, address=None):
        member = Member(name=name, address=address)
        member_service.join(member)
        return member
    return _create


@pytest.fixture
def create_book(item_service):
    def _create(name, price, stock_quantity):
        book = Book(name=name, price=price, stock_quantity=stock_quantity)
        item_service.save_item(book)
        return book
    return _create


@pytest.fixture
def place_order(db_session):
    """Persist an order with one line per (item, count) pair, bypassing the service."""
    from domain.value_objects import DeliveryStatus
    from models import Delivery, Order, OrderItem

    def _place(member, *lines):
        order_items = [OrderItem.create_order_item(item, item.price, count) for item, count in lines]
        delivery = Delivery(address=member.address, status=DeliveryStatus.READY.value)
        order = Order.create_order(member, delivery, *order_items)
        db_session.add(order)
        db_session.commit()
        return order
    return _place
