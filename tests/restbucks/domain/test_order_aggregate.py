"""Tests for Order aggregate construction, line items and payment recording."""

from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError
from restbucks.errors import IllegalStateTransition
from restbucks.order.events import OrderPaid
from restbucks.order.order import LineItem, Location, Milk, Order, OrderStatus, Size
from restbucks.payment.payment import CreditCardPayment
from restbucks.utils.clock import set_clock


def _make_order(**kwargs):
    return Order.create(
        items_data=[
            {"name": "Cappuccino", "size": "Medium", "milk": "Whole", "quantity": 2, "price": 3.2},
            {"name": "Espresso", "price": 1.8},
        ],
        **kwargs,
    )


class TestOrderCreation:
    def test_defaults(self):
        order = _make_order()
        assert order.id is not None
        assert order.status == OrderStatus.PAYMENT_EXPECTED.value
        assert order.location == Location.TAKE_AWAY.value
        assert order.ordered_at is not None

    def test_ordered_at_follows_processing_clock(self):
        moment = datetime(2020, 11, 15, 9, 0, tzinfo=UTC)
        set_clock(lambda: moment)
        assert _make_order().ordered_at == moment

    def test_in_store_location(self):
        order = _make_order(location=Location.IN_STORE.value)
        assert order.location == Location.IN_STORE.value

    def test_line_items(self):
        order = _make_order()
        assert len(order.items) == 2
        cappuccino = order.items[0]
        assert cappuccino.size == Size.MEDIUM.value
        assert cappuccino.milk == Milk.WHOLE.value

    def test_line_item_defaults(self):
        item = LineItem(name="Mocha", price=4.0)
        assert item.quantity == 1
        assert item.size == Size.LARGE.value
        assert item.milk == Milk.SEMI.value

    def test_total(self):
        assert _make_order().total == pytest.approx(8.2)

    def test_empty_order_total(self):
        assert Order.create(items_data=[]).total == 0

    def test_line_item_requires_positive_quantity(self):
        with pytest.raises(ValidationError):
            LineItem(name="Latte", price=2.0, quantity=0)

    def test_line_item_rejects_unknown_size(self):
        with pytest.raises(ValidationError):
            LineItem(name="Latte", price=2.0, size="Venti")


class TestRecordPayment:
    def _payment_for(self, order):
        return CreditCardPayment(
            order_id=str(order.id),
            credit_card_number="4321432143214321",
            amount=order.total,
            paid_at=datetime(2020, 11, 15, tzinfo=UTC),
        )

    def test_raises_order_paid(self):
        order = _make_order()
        order.mark_paid()
        payment = self._payment_for(order)

        order.record_payment(payment)

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPaid)
        assert event.order_id == str(order.id)
        assert event.payment_id == str(payment.id)
        assert event.amount == pytest.approx(8.2)

    def test_mark_paid_alone_raises_no_event(self):
        order = _make_order()
        order.mark_paid()
        assert len(order._events) == 0

    def test_requires_paid_status(self):
        order = _make_order()
        with pytest.raises(IllegalStateTransition):
            order.record_payment(self._payment_for(order))
