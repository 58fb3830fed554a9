"""Credit card registration: command and handler."""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from restbucks.creditcard.credit_card import CreditCard
from restbucks.domain import restbucks


@restbucks.command(part_of="CreditCard")
class RegisterCreditCard:
    """Put a customer's credit card on file."""

    number = String(required=True, max_length=16)
    card_holder_name = String(required=True, max_length=255)
    expiry_month = Integer(required=True, min_value=1, max_value=12)
    expiry_year = Integer(required=True)


@restbucks.command_handler(part_of=CreditCard)
class RegisterCreditCardHandler:
    @handle(RegisterCreditCard)
    def register_credit_card(self, command):
        credit_card = CreditCard.register(
            number=command.number,
            card_holder_name=command.card_holder_name,
            expiry_month=command.expiry_month,
            expiry_year=command.expiry_year,
        )
        current_domain.repository_for(CreditCard).add(credit_card)
        return credit_card.number
