"""Order preparation: commands and handler.

The barista picks up paid orders, prepares them, and leaves them on the
counter for the customer to take.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from restbucks.domain import restbucks
from restbucks.order.order import Order

logger = structlog.get_logger(__name__)


@restbucks.command(part_of="Order")
class StartPreparation:
    """Begin preparing the drinks of a paid order."""

    order_id = Identifier(required=True)


@restbucks.command(part_of="Order")
class FinishPreparation:
    """Mark an order's drinks as ready for pickup."""

    order_id = Identifier(required=True)


@restbucks.command_handler(part_of=Order)
class PreparationHandler:
    @handle(StartPreparation)
    def start_preparation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_in_preparation()
        repo.add(order)
        logger.info("Order preparation started", order_id=str(order.id))

    @handle(FinishPreparation)
    def finish_preparation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_prepared()
        repo.add(order)
        logger.info("Order prepared", order_id=str(order.id))
