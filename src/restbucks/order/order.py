"""Order aggregate (CQRS): a customer's drinks, tracked from payment to pickup.

State Machine:
    PAYMENT_EXPECTED → PAID → IN_PREPARATION → PREPARED → TAKEN

Each mutator accepts exactly one predecessor state; there are no backward
edges. An order counts as paid from PAID onwards.
"""

from enum import Enum

from protean.fields import DateTime, Float, HasMany, Integer, String

from restbucks.domain import restbucks
from restbucks.errors import IllegalStateTransition
from restbucks.order.events import OrderPaid
from restbucks.utils.clock import now


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PAYMENT_EXPECTED = "Payment_Expected"
    PAID = "Paid"
    IN_PREPARATION = "In_Preparation"
    PREPARED = "Prepared"
    TAKEN = "Taken"


class Location(Enum):
    TAKE_AWAY = "Take_Away"
    IN_STORE = "In_Store"


class Size(Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class Milk(Enum):
    SKIM = "Skim"
    SEMI = "Semi"
    WHOLE = "Whole"


_VALID_TRANSITIONS = {
    OrderStatus.PAYMENT_EXPECTED: {OrderStatus.PAID},
    OrderStatus.PAID: {OrderStatus.IN_PREPARATION},
    OrderStatus.IN_PREPARATION: {OrderStatus.PREPARED},
    OrderStatus.PREPARED: {OrderStatus.TAKEN},
    OrderStatus.TAKEN: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@restbucks.entity(part_of="Order")
class LineItem:
    """A drink on the order."""

    name = String(required=True, max_length=100)
    size = String(choices=Size, default=Size.LARGE.value)
    milk = String(choices=Milk, default=Milk.SEMI.value)
    quantity = Integer(min_value=1, default=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@restbucks.aggregate
class Order:
    location = String(choices=Location, default=Location.TAKE_AWAY.value)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PAYMENT_EXPECTED.value,
    )
    items = HasMany(LineItem)
    ordered_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, items_data, location=Location.TAKE_AWAY.value):
        """Create an order awaiting payment.

        Args:
            items_data: List of dicts with name, price and optionally
                        size, milk, quantity.
            location: Take_Away or In_Store.
        """
        order = cls(
            location=location,
            status=OrderStatus.PAYMENT_EXPECTED.value,
            ordered_at=now(),
        )
        for item in items_data:
            order.add_items(LineItem(**item))
        return order

    @property
    def total(self) -> float:
        return sum(item.price * item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status: OrderStatus) -> None:
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise IllegalStateTransition(
                self.id,
                f"Cannot transition from {current.value} to {target_status.value}",
            )

    def is_paid(self) -> bool:
        return OrderStatus(self.status) != OrderStatus.PAYMENT_EXPECTED

    def is_taken(self) -> bool:
        return OrderStatus(self.status) == OrderStatus.TAKEN

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def mark_paid(self) -> None:
        self._assert_can_transition(OrderStatus.PAID)
        self.status = OrderStatus.PAID.value

    def mark_in_preparation(self) -> None:
        self._assert_can_transition(OrderStatus.IN_PREPARATION)
        self.status = OrderStatus.IN_PREPARATION.value

    def mark_prepared(self) -> None:
        self._assert_can_transition(OrderStatus.PREPARED)
        self.status = OrderStatus.PREPARED.value

    def mark_taken(self) -> None:
        self._assert_can_transition(OrderStatus.TAKEN)
        self.status = OrderStatus.TAKEN.value

    def hand_over(self) -> None:
        """Give the order to the customer along with the receipt.

        Unlike ``mark_taken`` this does not require the order to be paid or
        prepared; only an order that was already taken is rejected.
        """
        if self.is_taken():
            raise IllegalStateTransition(self.id, "Order has already been taken")
        self.status = OrderStatus.TAKEN.value

    def record_payment(self, payment) -> None:
        """Announce that ``payment`` settled this order."""
        if OrderStatus(self.status) != OrderStatus.PAID:
            raise IllegalStateTransition(self.id, "Payments can only be recorded for Paid orders")

        self.raise_(
            OrderPaid(
                order_id=str(self.id),
                payment_id=str(payment.id),
                amount=payment.amount,
                paid_at=payment.paid_at,
            )
        )
