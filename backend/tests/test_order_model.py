import pytest

from domain.value_objects import Address, DeliveryStatus, OrderStatus
from exceptions import NotEnoughStockError, OrderCancellationError
from models import Book, Delivery, Member, Order, OrderItem


@pytest.fixture
def member():
    return Member(name="Mona", address=Address("Seoul", "Dongjak", "12345"))


def new_delivery(member):
    return Delivery(address=member.address, status=DeliveryStatus.READY.value)


def test_set_member_links_both_sides(member):
    order = Order()

    order.set_member(member)

    assert order.member is member
    assert member.orders == [order]


def test_set_delivery_links_both_sides(member):
    order = Order()
    delivery = new_delivery(member)

    order.set_delivery(delivery)

    assert order.delivery is delivery
    assert delivery.order is order


def test_add_order_item_links_both_sides():
    order = Order()
    book = Book(name="Book", price=100, stock_quantity=5)
    first = OrderItem.create_order_item(book, 100, 1)
    second = OrderItem.create_order_item(book, 100, 2)

    order.add_order_item(first)
    order.add_order_item(second)

    assert order.order_items == [first, second]
    assert first.order is order
    assert second.order is order


def test_create_order_builds_ordered_aggregate(member):
    jpa = Book(name="JPA", price=10000, stock_quantity=10)
    spring = Book(name="Spring", price=20000, stock_quantity=10)

    order = Order.create_order(
        member,
        new_delivery(member),
        OrderItem.create_order_item(jpa, 10000, 3),
        OrderItem.create_order_item(spring, 20000, 2),
    )

    assert order.status == OrderStatus.ORDERED
    assert order.order_date is not None
    assert member.orders == [order]
    assert order.delivery.address == Address("Seoul", "Dongjak", "12345")
    assert jpa.stock_quantity == 7
    assert spring.stock_quantity == 8


def test_total_price_is_sum_of_lines(member):
    books = [Book(name=f"Book {i}", price=price, stock_quantity=10) for i, price in enumerate((1000, 2500, 700))]
    lines = [OrderItem.create_order_item(book, book.price, count) for book, count in zip(books, (1, 4, 3))]

    order = Order.create_order(member, new_delivery(member), *lines)

    assert order.total_price == 1000 * 1 + 2500 * 4 + 700 * 3
    assert order.total_price == sum(line.order_price * line.count for line in order.order_items)


def test_total_price_follows_line_changes(member):
    book = Book(name="Book", price=1000, stock_quantity=10)
    order = Order.create_order(member, new_delivery(member), OrderItem.create_order_item(book, 1000, 2))

    order.add_order_item(OrderItem.create_order_item(book, 500, 1))

    assert order.total_price == 2500


def test_create_order_item_takes_nothing_when_stock_is_short():
    book = Book(name="Book", price=1000, stock_quantity=2)

    with pytest.raises(NotEnoughStockError):
        OrderItem.create_order_item(book, 1000, 3)

    assert book.stock_quantity == 2


def test_cancel_restores_stock_of_every_line(member):
    jpa = Book(name="JPA", price=10000, stock_quantity=10)
    spring = Book(name="Spring", price=20000, stock_quantity=5)
    order = Order.create_order(
        member,
        new_delivery(member),
        OrderItem.create_order_item(jpa, 10000, 4),
        OrderItem.create_order_item(spring, 20000, 5),
    )

    order.cancel()

    assert order.status == OrderStatus.CANCELED
    assert jpa.stock_quantity == 10
    assert spring.stock_quantity == 5


def test_cancel_twice_is_rejected_without_restoring_again(member):
    book = Book(name="Book", price=1000, stock_quantity=10)
    order = Order.create_order(member, new_delivery(member), OrderItem.create_order_item(book, 1000, 2))
    order.cancel()

    with pytest.raises(OrderCancellationError):
        order.cancel()

    assert order.status == OrderStatus.CANCELED
    assert book.stock_quantity == 10


def test_cancel_after_delivery_is_rejected(member):
    book = Book(name="Book", price=1000, stock_quantity=10)
    order = Order.create_order(member, new_delivery(member), OrderItem.create_order_item(book, 1000, 2))
    order.delivery.status = DeliveryStatus.COMP.value

    with pytest.raises(OrderCancellationError):
        order.cancel()

    assert order.status == OrderStatus.ORDERED
    assert book.stock_quantity == 8


def test_order_status_transitions():
    assert OrderStatus.ORDERED.can_transition_to(OrderStatus.CANCELED)
    assert not OrderStatus.CANCELED.can_transition_to(OrderStatus.ORDERED)
    assert not OrderStatus.CANCELED.can_transition_to(OrderStatus.CANCELED)
    assert OrderStatus.CANCELED.is_terminal()
    assert not OrderStatus.ORDERED.is_terminal()
