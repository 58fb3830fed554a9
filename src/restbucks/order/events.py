"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier

from restbucks.domain import restbucks


@restbucks.event(part_of="Order")
class OrderPaid:
    """The order was paid with a credit card and the payment is on record."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_id = Identifier(required=True)
    amount = Float(required=True)
    paid_at = DateTime(required=True)
