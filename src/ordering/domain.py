"""Ordering bounded context: Shopping Cart and Checkout.

The cart holds snapshot copies of the products a shopper picked, bounded
by the live stock in the inventory ledger. Checkout turns the cart into
ledger decrements and an order summary, all-or-nothing.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
