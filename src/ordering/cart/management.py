"""Cart management: the shopper-facing operations on the storefront's cart.

Live stock lives in the inventory context, so every operation reads what
it needs from the ledger first and only then loads, mutates and saves the
cart inside the ordering context.
"""

from decimal import Decimal
from typing import Protocol

from protean.utils.globals import current_domain

from identity.account.accounts import Session
from inventory.ledger.ledger import InventoryLedger
from ordering.cart.cart import ShoppingCart
from ordering.cart.lines import CartLine
from ordering.checkout.summary import OrderSummary
from ordering.domain import logger, ordering
from shared.errors import LoginRequiredError, OutOfStockError


class SessionProvider(Protocol):
    def get_active_session(self) -> Session | None: ...


def require_session(sessions: SessionProvider, action: str) -> Session:
    session = sessions.get_active_session()
    if session is None:
        raise LoginRequiredError({"session": [f"Please login first to {action}"]})
    return session


class CartService:
    def __init__(self, ledger: InventoryLedger, sessions: SessionProvider):
        self._ledger = ledger
        self._sessions = sessions
        self._cart_id: str | None = None

    def _load(self) -> ShoppingCart:
        """The storefront's cart, created on first use."""
        repo = current_domain.repository_for(ShoppingCart)
        if self._cart_id is not None:
            cart = repo.get_or_none(self._cart_id)
            if cart is not None:
                return cart

        cart = ShoppingCart.create()
        repo.add(cart)
        self._cart_id = str(cart.id)
        return cart

    def cart(self) -> ShoppingCart:
        with ordering.domain_context():
            return self._load()

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def cart_id(self) -> str:
        return str(self.cart().id)

    @property
    def lines(self) -> list[CartLine]:
        return list(self.cart().lines)

    @property
    def count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, product_id) -> CartLine | None:
        return self.cart().get_line(product_id)

    def total(self) -> Decimal:
        return self.cart().total()

    def _live_stock(self, product_id) -> int:
        product = self._ledger.find(product_id)
        return product.stock if product is not None else 0

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id) -> CartLine:
        """Add one unit of a product, or bump the existing line by one."""
        require_session(self._sessions, "add items to your cart")

        if self._ledger.is_sold_out(product_id):
            raise OutOfStockError({"product_id": [f"Product {product_id} is sold out"]})
        product = self._ledger.lookup(product_id)

        with ordering.domain_context():
            cart = self._load()
            line = cart.add_item(product)
            current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("cart_item_added", product_id=line.product_id, quantity=line.quantity)
        return line

    def update_quantity(self, product_id, delta: int) -> CartLine | None:
        """Shift a line's quantity by ``delta``; dropping below one removes the line.

        Returns the updated line, or None when the line was removed.
        """
        line = self.cart().require_line(product_id)
        new_quantity = line.quantity + delta

        live_stock = 0
        if new_quantity >= 1:
            if self._ledger.is_sold_out(product_id):
                raise OutOfStockError({"product_id": [f'"{line.name}" is sold out; remove it from your cart']})
            live_stock = self._live_stock(product_id)

        with ordering.domain_context():
            cart = self._load()
            updated = cart.update_quantity(product_id, delta, live_stock)
            current_domain.repository_for(ShoppingCart).add(cart)

        if updated is None:
            logger.info("cart_item_removed", product_id=str(product_id), reason="quantity_below_one")
        else:
            logger.info(
                "cart_quantity_updated",
                product_id=str(product_id),
                previous_quantity=line.quantity,
                new_quantity=updated.quantity,
            )
        return updated

    def remove_from_cart(self, product_id) -> None:
        with ordering.domain_context():
            cart = self._load()
            if not cart.remove_item(product_id):
                return
            current_domain.repository_for(ShoppingCart).add(cart)

        logger.info("cart_item_removed", product_id=str(product_id))

    # -------------------------------------------------------------------
    # Fulfilment choices
    # -------------------------------------------------------------------
    def set_selection(self, product_id, field, value: str) -> CartLine:
        """Choose the payment or logistics method for a line from what the product accepts."""
        with ordering.domain_context():
            cart = self._load()
            line = cart.select(product_id, field, value)
            current_domain.repository_for(ShoppingCart).add(cart)

        logger.info(
            "cart_selection_changed",
            product_id=str(product_id),
            field=getattr(field, "value", field),
            value=value,
        )
        return line

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def clear(self) -> None:
        with ordering.domain_context():
            cart = self._load()
            if not cart.lines:
                return
            cart.clear()
            current_domain.repository_for(ShoppingCart).add(cart)

    def complete_checkout(self, order: OrderSummary) -> None:
        with ordering.domain_context():
            cart = self._load()
            cart.complete_checkout(order)
            current_domain.repository_for(ShoppingCart).add(cart)
