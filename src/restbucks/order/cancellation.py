"""Order cancellation: command and handler.

Only orders still awaiting payment can be cancelled; cancelling removes them.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from restbucks.domain import restbucks
from restbucks.errors import AlreadyPaid
from restbucks.order.order import Order

logger = structlog.get_logger(__name__)


@restbucks.command(part_of="Order")
class CancelOrder:
    """Withdraw an order that has not been paid yet."""

    order_id = Identifier(required=True)


@restbucks.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        if order.is_paid():
            raise AlreadyPaid(order.id, "Paid orders cannot be cancelled")

        repo._dao.delete(order)
        logger.info("Order cancelled", order_id=str(order.id))
