"""Inventory bounded context: product listings and the stock ledger.

The ledger is the single authority on how many units of each listed
product remain. Stock only ever goes down (at checkout); a product whose
stock reaches zero leaves the catalog.
"""

import structlog
from protean.domain import Domain

inventory = Domain(name="inventory")

logger = structlog.get_logger(__name__)
