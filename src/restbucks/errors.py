"""Failures raised by the order payment workflow.

All of them are Protean ValidationErrors keyed by the offending field, and all
carry the identity of the order concerned plus a human-readable cause.
"""

from protean.exceptions import ValidationError


class OrderError(ValidationError):
    """Base for failures concerning a single order."""

    field = "order"

    def __init__(self, order_id, cause: str):
        self.order_id = str(order_id) if order_id is not None else None
        self.cause = cause
        super().__init__({self.field: [cause]})


class IllegalStateTransition(OrderError):
    """An order state mutator was invoked from a state that does not permit it."""

    field = "status"


class PaymentError(OrderError):
    field = "payment"


class AlreadyPaid(PaymentError):
    """The order is already PAID or further along."""


class CardNotFound(PaymentError):
    """No credit card is on record for the supplied number."""

    field = "credit_card"


class CardInvalid(PaymentError):
    """The credit card has expired."""

    field = "credit_card"


class ConflictOnPersist(PaymentError):
    """The payment store already holds a payment for the order."""
