"""Order payment workflow: commands, handler and the PaymentWorkflow entry point.

Paying an order and taking its receipt each run as a single command, so the
handler's UnitOfWork spans every read, the state change and every write:
either all repository changes commit or none do. OrderPaid is raised on the
order and only reaches subscribers once the UnitOfWork has committed.

PaymentWorkflow serializes operations per order around the whole UnitOfWork,
which makes the "already paid" check linearizable with a concurrent commit.
"""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from restbucks.creditcard.credit_card import CreditCard, CreditCardNumber
from restbucks.domain import restbucks
from restbucks.errors import AlreadyPaid, CardInvalid, CardNotFound, ConflictOnPersist
from restbucks.order.order import Order
from restbucks.payment.payment import CreditCardPayment, Receipt
from restbucks.utils.clock import now
from restbucks.utils.locks import order_lock
from restbucks.utils.logging import order_context

logger = structlog.get_logger(__name__)


@restbucks.command(part_of="Order")
class PayOrder:
    """Pay an order with a credit card on file."""

    order_id = Identifier(required=True)
    # Format is checked by CreditCardNumber once the order is known to be unpaid
    card_number = String()


@restbucks.command(part_of="Order")
class TakeReceipt:
    """Hand the receipt over to the customer, marking the order taken."""

    order_id = Identifier(required=True)


@restbucks.command_handler(part_of=Order)
class PaymentWorkflowHandler:
    @handle(PayOrder)
    def pay(self, command):
        orders = current_domain.repository_for(Order)
        order = orders.get(command.order_id)

        if order.is_paid():
            raise AlreadyPaid(order.id, "Order already paid!")

        number = CreditCardNumber(value=command.card_number)
        credit_card = current_domain.repository_for(CreditCard).find_by_number(number)
        if credit_card is None:
            raise CardNotFound(order.id, f"No credit card found for number: {number.value}")

        paid_at = now()
        if not credit_card.is_valid(paid_at):
            raise CardInvalid(
                order.id,
                f"Invalid credit card with number {number.value}, expired {credit_card.expiration}!",
            )

        order.mark_paid()
        payment = current_domain.repository_for(CreditCardPayment).save(
            CreditCardPayment.create(credit_card, order, paid_at=paid_at)
        )
        order.record_payment(payment)
        orders.add(order)

        logger.info(
            "Order paid",
            order_id=str(order.id),
            payment_id=str(payment.id),
            amount=payment.amount,
        )
        return payment

    @handle(TakeReceipt)
    def take_receipt(self, command):
        orders = current_domain.repository_for(Order)
        order = orders.get(command.order_id)

        order.hand_over()
        orders.add(order)

        payment = current_domain.repository_for(CreditCardPayment).find_by_order(order.id)
        if payment is None:
            logger.warning("Order taken without a payment on record", order_id=str(order.id))
            return None

        logger.info("Receipt taken", order_id=str(order.id), payment_id=str(payment.id))
        return payment.receipt


def _order_id(order) -> str:
    return str(getattr(order, "id", order))


def _refresh(order) -> None:
    """Bring a caller-held Order up to the committed status and version."""
    if not isinstance(order, Order):
        return
    stored = current_domain.repository_for(Order).get(order.id)
    order.status = stored.status
    order._version = stored._version


class PaymentWorkflow:
    """Entry point for paying orders and handing over receipts.

    Every operation accepts an Order or an order identity. An Order passed in
    reflects the committed status once the operation succeeds.
    """

    def pay(self, order, card_number) -> CreditCardPayment:
        order_id = _order_id(order)
        if isinstance(card_number, CreditCardNumber):
            card_number = card_number.value

        with order_lock(order_id), order_context(order_id):
            try:
                payment = current_domain.process(
                    PayOrder(order_id=order_id, card_number=card_number),
                    asynchronous=False,
                )
            except (ConflictOnPersist, ExpectedVersionError) as exc:
                logger.warning("Concurrent payment detected")
                raise AlreadyPaid(order_id, "Order already paid!") from exc
            _refresh(order)
            return payment

    def get_payment_for(self, order) -> CreditCardPayment | None:
        return current_domain.repository_for(CreditCardPayment).find_by_order(_order_id(order))

    def take_receipt_for(self, order) -> Receipt | None:
        order_id = _order_id(order)
        with order_lock(order_id), order_context(order_id):
            receipt = current_domain.process(TakeReceipt(order_id=order_id), asynchronous=False)
            _refresh(order)
            return receipt
