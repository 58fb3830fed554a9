"""Shared BDD fixtures and step definitions for order payment and receipts."""

from datetime import UTC, date, datetime

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from restbucks.order.order import Order
from restbucks.order.preparation import FinishPreparation, StartPreparation
from restbucks.utils.clock import set_clock


@pytest.fixture()
def error():
    """Container for the error raised by a When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a credit card "{number}" expiring {year:d}-{month:d} is on file'))
def _(card_factory, number, year, month):
    card_factory(number=number, expiry_month=month, expiry_year=year)


@given(parsers.cfparse("the current date is {day}"))
def _(day):
    moment = datetime.combine(date.fromisoformat(day), datetime.min.time(), tzinfo=UTC)
    set_clock(lambda: moment)


@given("an order awaiting payment", target_fixture="order")
def _(order_factory):
    return order_factory()


@given(parsers.cfparse('the order was paid with card "{number}"'), target_fixture="payment")
def _(workflow, order, number):
    return workflow.pay(order, number)


@given("the order was prepared")
def _(order):
    current_domain.process(StartPreparation(order_id=str(order.id)), asynchronous=False)
    current_domain.process(FinishPreparation(order_id=str(order.id)), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def _(order, status):
    assert current_domain.repository_for(Order).get(order.id).status == status
