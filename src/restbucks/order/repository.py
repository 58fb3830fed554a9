"""Order store."""

from protean.exceptions import ObjectNotFoundError

from restbucks.domain import restbucks
from restbucks.order.order import Order


@restbucks.repository(part_of=Order)
class OrderRepository:
    def find_by_id(self, order_id) -> Order | None:
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            return None
