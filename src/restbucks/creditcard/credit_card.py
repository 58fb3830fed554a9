"""CreditCard aggregate with CreditCardNumber and Expiration value objects."""

import calendar
import re
from datetime import date, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Integer, String, ValueObject

from restbucks.domain import restbucks
from restbucks.utils.clock import now

_CARD_NUMBER_PATTERN = re.compile(r"^[0-9]{16}$")


@restbucks.value_object(part_of="CreditCard")
class CreditCardNumber:
    """A 16-digit credit card number.

    Equality is by value; two numbers with the same digits are the same number.
    """

    value = String(required=True, max_length=16)

    @invariant.post
    def must_be_sixteen_digits(self):
        if self.value is None or not _CARD_NUMBER_PATTERN.match(self.value):
            raise ValidationError({"number": ["Credit card number must consist of 16 digits"]})

    @property
    def last4(self) -> str:
        return self.value[-4:]


@restbucks.value_object(part_of="CreditCard")
class Expiration:
    """Month and year printed on the card. The card is usable through the last day of that month."""

    month = Integer(required=True, min_value=1, max_value=12)
    year = Integer(required=True, min_value=1900)

    def last_valid_day(self) -> date:
        _, days_in_month = calendar.monthrange(self.year, self.month)
        return date(self.year, self.month, days_in_month)

    def __str__(self):
        return f"{self.year:04d}-{self.month:02d}"


@restbucks.aggregate
class CreditCard:
    number = String(identifier=True, max_length=16)
    card_holder_name = String(required=True, max_length=255)
    expiration = ValueObject(Expiration, required=True)

    @classmethod
    def register(cls, number, card_holder_name, expiry_month, expiry_year):
        card_number = CreditCardNumber(value=number)
        return cls(
            number=card_number.value,
            card_holder_name=card_holder_name,
            expiration=Expiration(month=expiry_month, year=expiry_year),
        )

    @property
    def card_number(self) -> CreditCardNumber:
        return CreditCardNumber(value=self.number)

    def is_valid(self, on: datetime | date | None = None) -> bool:
        """Whether the card can still be charged at ``on`` (defaults to the processing clock)."""
        on = on or now()
        if isinstance(on, datetime):
            on = on.date()
        return on <= self.expiration.last_valid_day()
