"""Storefront: the session-scoped context that owns every marketplace collection.

One storefront wires one account registry, inventory ledger, cart and
checkout processor together. Components receive their collaborators
explicitly; the records themselves live in each bounded context's
protean repositories.
"""

from identity.account.accounts import AccountRegistry
from inventory.ledger.ledger import InventoryLedger
from inventory.ledger.product import Product, ProductListing
from ordering.cart.management import CartService, require_session
from ordering.checkout.checkout import CheckoutProcessor


class Storefront:
    def __init__(self):
        self.accounts = AccountRegistry()
        self.ledger = InventoryLedger()
        self.cart = CartService(self.ledger, self.accounts)
        self.checkout = CheckoutProcessor(self.cart, self.ledger, self.accounts)

    def list_product(self, listing: ProductListing) -> Product:
        """List a product for the logged-in seller."""
        session = require_session(self.accounts, "sell items")
        return self.ledger.add_product(listing, listed_by=session.email)
