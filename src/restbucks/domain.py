"""Restbucks bounded context: orders, credit cards and payments.

Handles the order payment workflow: paying an order once with a credit card,
walking the order through preparation, and handing over the receipt.
"""

from protean.domain import Domain

from restbucks.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

restbucks = Domain(name="restbucks")
