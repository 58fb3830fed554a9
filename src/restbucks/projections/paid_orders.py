"""Paid orders: the barista's queue of orders that can be prepared."""

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier
from protean.utils.globals import current_domain

from restbucks.domain import restbucks
from restbucks.order.events import OrderPaid
from restbucks.order.order import Order


@restbucks.projection
class PaidOrderView:
    order_id = Identifier(identifier=True, required=True)
    payment_id = Identifier(required=True)
    amount = Float()
    paid_at = DateTime()


@restbucks.projector(projector_for=PaidOrderView, aggregates=[Order])
class PaidOrderProjector:
    @on(OrderPaid)
    def on_order_paid(self, event):
        current_domain.repository_for(PaidOrderView).add(
            PaidOrderView(
                order_id=event.order_id,
                payment_id=event.payment_id,
                amount=event.amount,
                paid_at=event.paid_at,
            )
        )
