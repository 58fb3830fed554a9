"""CreditCardPayment aggregate (CQRS) and the Receipt derived from it.

A payment is created exactly once per order, when the order is paid, and is
never modified afterwards. The receipt is not stored; it is read off the
payment whenever a customer asks for it.
"""

from protean.fields import DateTime, Float, Identifier, String

from restbucks.domain import restbucks
from restbucks.utils.clock import now


@restbucks.value_object(part_of="CreditCardPayment")
class Receipt:
    """Proof of payment handed to the customer."""

    order_id = Identifier(required=True)
    amount = Float(required=True)
    paid_at = DateTime(required=True)
    card_last4 = String(max_length=4)


@restbucks.aggregate
class CreditCardPayment:
    order_id = Identifier(required=True)
    credit_card_number = String(required=True, max_length=16)
    amount = Float(required=True, min_value=0.0)
    paid_at = DateTime(required=True)

    @classmethod
    def create(cls, credit_card, order, paid_at=None):
        """Settle ``order`` with ``credit_card`` for the order's total."""
        return cls(
            order_id=str(order.id),
            credit_card_number=credit_card.number,
            amount=order.total,
            paid_at=paid_at or now(),
        )

    @property
    def receipt(self) -> Receipt:
        return Receipt(
            order_id=self.order_id,
            amount=self.amount,
            paid_at=self.paid_at,
            card_last4=self.credit_card_number[-4:],
        )
