"""Credit card store."""

from protean.exceptions import ObjectNotFoundError

from restbucks.creditcard.credit_card import CreditCard, CreditCardNumber
from restbucks.domain import restbucks


@restbucks.repository(part_of=CreditCard)
class CreditCardRepository:
    def find_by_number(self, number: CreditCardNumber) -> CreditCard | None:
        try:
            return self.get(number.value)
        except ObjectNotFoundError:
            return None
