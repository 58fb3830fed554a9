"""Payment store: at most one payment per order."""

from restbucks.domain import restbucks
from restbucks.errors import ConflictOnPersist
from restbucks.payment.payment import CreditCardPayment


@restbucks.repository(part_of=CreditCardPayment)
class CreditCardPaymentRepository:
    def find_by_order(self, order_id) -> CreditCardPayment | None:
        payments = self._dao.query.filter(order_id=str(order_id)).all().items
        return payments[0] if payments else None

    def save(self, payment: CreditCardPayment) -> CreditCardPayment:
        """Persist a new payment, refusing a second one for the same order."""
        existing = self.find_by_order(payment.order_id)
        if existing is not None and str(existing.id) != str(payment.id):
            raise ConflictOnPersist(payment.order_id, "A payment is already on record for this order")

        self.add(payment)
        return payment
