from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship, composite
from datetime import datetime
from database import Base
from constants import ItemType
from domain.value_objects import Address, DeliveryStatus, OrderStatus
from exceptions import NotEnoughStockError, OrderCancellationError, ValidationError


def _check_quantity(quantity: int) -> None:
    if quantity < 0:
        raise ValidationError(
            f"Quantity must be non-negative: {quantity}",
            invalid_fields={"quantity": quantity},
        )


class Member(Base):
    __tablename__ = 'members'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    city = Column(String)
    street = Column(String)
    zipcode = Column(String)

    address = composite(Address, city, street, zipcode)

    # Back-reference only; Order.member is the owning side
    orders = relationship("Order", back_populates="member")

    __table_args__ = (
        Index('idx_members_name', 'name'),
    )


class Item(Base):
    """
    Something that can be ordered.

    Variants (Book, Album, Movie) share the items table and are told apart
    by the dtype discriminator. The version column is bumped on every
    update; a flush against a row another transaction already changed
    fails with StaleDataError instead of overwriting its stock.
    """
    __tablename__ = 'items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    dtype = Column(String(1), nullable=False)
    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False, default=0)
    stock_quantity = Column(Integer, nullable=False, default=0)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {
        'polymorphic_on': dtype,
        'polymorphic_identity': ItemType.ITEM.value,
        'version_id_col': version,
    }

    __table_args__ = (
        CheckConstraint('stock_quantity >= 0', name='ck_items_stock_non_negative'),
        CheckConstraint('price >= 0', name='ck_items_price_non_negative'),
    )

    def add_stock(self, quantity: int) -> None:
        """Increase stock by quantity. No upper bound."""
        _check_quantity(quantity)
        self.stock_quantity = (self.stock_quantity or 0) + quantity

    def remove_stock(self, quantity: int) -> None:
        """
        Decrease stock by quantity.

        Raises:
            NotEnoughStockError: quantity exceeds the current stock; the
                stock is left unchanged
        """
        _check_quantity(quantity)
        available = self.stock_quantity or 0
        rest = available - quantity
        if rest < 0:
            raise NotEnoughStockError(requested=quantity, available=available)
        self.stock_quantity = rest


class Book(Item):
    author = Column(String)
    isbn = Column(String)

    __mapper_args__ = {'polymorphic_identity': ItemType.BOOK.value}


class Album(Item):
    artist = Column(String)
    etc = Column(String)

    __mapper_args__ = {'polymorphic_identity': ItemType.ALBUM.value}


class Movie(Item):
    director = Column(String)
    actor = Column(String)

    __mapper_args__ = {'polymorphic_identity': ItemType.MOVIE.value}


class Delivery(Base):
    __tablename__ = 'deliveries'

    id = Column(Integer, primary_key=True, autoincrement=True)
    city = Column(String)
    street = Column(String)
    zipcode = Column(String)
    status = Column(String, nullable=False, default=DeliveryStatus.READY.value)

    address = composite(Address, city, street, zipcode)

    order = relationship("Order", back_populates="delivery", uselist=False)

    __table_args__ = (
        CheckConstraint("status IN ('READY', 'COMP')"),
    )


class OrderItem(Base):
    """
    One ordered line: which item, at what price, how many.

    order_price is a snapshot taken when the order is placed, so later
    price changes on the item do not alter existing orders.
    """
    __tablename__ = 'order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_id = Column(Integer, ForeignKey('items.id'), nullable=False)
    order_id = Column(Integer, ForeignKey('orders.id'), nullable=False)
    order_price = Column(Integer, nullable=False)
    count = Column(Integer, nullable=False)

    item = relationship("Item")
    order = relationship("Order", back_populates="order_items")

    __table_args__ = (
        CheckConstraint('count > 0', name='ck_order_items_count_positive'),
        Index('idx_order_items_order', 'order_id'),
    )

    @classmethod
    def create_order_item(cls, item: Item, order_price: int, count: int) -> "OrderItem":
        """
        Build an order line and take its quantity out of stock.

        Stock is removed first, so a NotEnoughStockError leaves no line behind.
        """
        item.remove_stock(count)
        return cls(item=item, order_price=order_price, count=count)

    def cancel(self) -> None:
        """Put the ordered quantity back into stock"""
        self.item.add_stock(self.count)

    @property
    def total_price(self) -> int:
        return self.order_price * self.count


class Order(Base):
    """
    An order placed by a member.

    Owns its Delivery and OrderItems (created, updated and deleted with the
    order); references its Member without owning it.

    Order States:
    - ORDERED: placed, stock already taken
    - CANCELED: stock returned; terminal
    """
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey('members.id'), nullable=False)
    delivery_id = Column(Integer, ForeignKey('deliveries.id'), unique=True)
    order_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    status = Column(String, nullable=False, default=OrderStatus.ORDERED.value)

    member = relationship("Member", back_populates="orders")
    delivery = relationship(
        "Delivery",
        back_populates="order",
        cascade="all, delete-orphan",
        single_parent=True,
    )
    order_items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        CheckConstraint("status IN ('ORDERED', 'CANCELED')"),
        Index('idx_orders_member', 'member_id'),
        Index('idx_orders_status', 'status'),
    )

    # back_populates mirrors each assignment onto the other side, so a
    # single call updates both ends of the association.

    def set_member(self, member: Member) -> None:
        """Link this order to member and add it to member.orders"""
        self.member = member

    def set_delivery(self, delivery: Delivery) -> None:
        """Attach delivery and point delivery.order back at this order"""
        self.delivery = delivery

    def add_order_item(self, order_item: OrderItem) -> None:
        """Append order_item and point order_item.order back at this order"""
        self.order_items.append(order_item)

    @classmethod
    def create_order(cls, member: Member, delivery: Delivery, *order_items: OrderItem) -> "Order":
        """
        Assemble a new ORDERED order.

        Args:
            member: Who places the order
            delivery: Where it goes; owned by the order from now on
            *order_items: Lines created with OrderItem.create_order_item

        Returns:
            Transient Order; add it to a session to persist the whole graph
        """
        order = cls()
        order.set_member(member)
        order.set_delivery(delivery)
        for order_item in order_items:
            order.add_order_item(order_item)
        order.status = OrderStatus.ORDERED.value
        order.order_date = datetime.utcnow()
        return order

    def cancel(self) -> None:
        """
        Cancel the order and return every line's quantity to stock.

        Raises:
            OrderCancellationError: the delivery is already complete, or the
                order was canceled before
        """
        if self.delivery is not None and self.delivery.status == DeliveryStatus.COMP:
            raise OrderCancellationError(self.id, "Orders that were already delivered cannot be canceled")

        current = OrderStatus(self.status or OrderStatus.ORDERED)
        if not current.can_transition_to(OrderStatus.CANCELED):
            raise OrderCancellationError(self.id, f"Order is already {current.value}")

        self.status = OrderStatus.CANCELED.value
        for order_item in self.order_items:
            order_item.cancel()

    @property
    def total_price(self) -> int:
        """Sum of the line totals, computed on every access"""
        return sum(order_item.total_price for order_item in self.order_items)
