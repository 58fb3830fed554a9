"""Shared fixtures for the Restbucks domain tests."""

from datetime import UTC, datetime

import pytest
from protean import current_domain
from restbucks.creditcard.credit_card import CreditCard
from restbucks.order.order import Order
from restbucks.payment.workflow import PaymentWorkflow
from restbucks.utils.clock import set_clock

CARD_NUMBER = "4321432143214321"

_DEFAULT_ITEMS = [
    {"name": "Latte", "size": "Large", "milk": "Semi", "quantity": 2, "price": 2.5},
    {"name": "Espresso", "size": "Small", "quantity": 1, "price": 1.5},
]


@pytest.fixture()
def card_number():
    return CARD_NUMBER


@pytest.fixture()
def frozen_clock():
    """Pin the processing clock to a moment before December 2020 ends."""
    moment = datetime(2020, 11, 15, 10, 30, tzinfo=UTC)
    set_clock(lambda: moment)
    return moment


@pytest.fixture()
def workflow():
    return PaymentWorkflow()


@pytest.fixture()
def order_factory():
    """Persist a new order awaiting payment."""

    def _create(items_data=None, **kwargs):
        order = Order.create(items_data=items_data or _DEFAULT_ITEMS, **kwargs)
        current_domain.repository_for(Order).add(order)
        return order

    return _create


@pytest.fixture()
def card_factory():
    """Persist a credit card, by default the one expiring in December 2020."""

    def _create(number=CARD_NUMBER, expiry_month=12, expiry_year=2020):
        credit_card = CreditCard.register(
            number=number,
            card_holder_name="Oliver Gierke",
            expiry_month=expiry_month,
            expiry_year=expiry_year,
        )
        current_domain.repository_for(CreditCard).add(credit_card)
        return credit_card

    return _create


@pytest.fixture()
def order(order_factory):
    return order_factory()


@pytest.fixture()
def credit_card(card_factory):
    return card_factory()
