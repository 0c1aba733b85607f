"""Checkout Processor: turns the cart into ledger decrements and an order summary.

Checkout is the one multi-step transaction in the marketplace and it is
all-or-nothing across lines:

    1. Reject an empty cart and a blank delivery address.
    2. Pre-validate every line against live stock. Any line whose product
       is gone or whose quantity exceeds stock aborts with
       StockConflictError before anything is touched.
    3. Decrement every line inside one inventory ``UnitOfWork``. If a
       decrement still fails, the unit of work rolls the products back and
       the failure surfaces as StockConflictError. StockChanged events are
       stored only when the whole unit commits.
    4. Build the OrderSummary, clear the cart and raise CheckoutCompleted.

A multi-user deployment must hold one lock per storefront around the whole
call; the single-actor model here needs none.
"""

from datetime import UTC, datetime
from uuid import uuid4

from protean import UnitOfWork

from inventory.domain import inventory
from inventory.ledger.ledger import InventoryLedger
from ordering.cart.lines import CartLine
from ordering.cart.management import CartService, SessionProvider
from ordering.checkout.summary import OrderLine, OrderSummary
from ordering.domain import logger
from shared.config import get_settings
from shared.errors import (
    EmptyCartError,
    NotFoundError,
    StockConflictError,
    StockError,
    ValidationError,
)
from shared.money import format_amount


class CheckoutProcessor:
    def __init__(self, cart: CartService, ledger: InventoryLedger, sessions: SessionProvider):
        self._cart = cart
        self._ledger = ledger
        self._sessions = sessions
        self._orders: list[OrderSummary] = []

    @property
    def orders(self) -> list[OrderSummary]:
        return list(self._orders)

    def checkout(self, delivery_address: str) -> OrderSummary:
        cart = self._cart.cart()
        lines = list(cart.lines)
        if not lines:
            raise EmptyCartError({"cart": ["Cart is empty"]})

        address = (delivery_address or "").strip()
        if not address:
            raise ValidationError({"delivery_address": ["Delivery address is required"]})

        conflicts = self._stock_conflicts(lines)
        if conflicts:
            logger.info("checkout_rejected", reason="stock_conflict", products=sorted(conflicts))
            raise StockConflictError(conflicts)

        try:
            with inventory.domain_context(), UnitOfWork():
                for line in lines:
                    self._ledger.decrement_stock(line.product_id, line.quantity)
        except (NotFoundError, StockError) as exc:
            logger.warning("checkout_rolled_back", error=exc.messages)
            raise StockConflictError(
                {"cart": [f"Stock changed during checkout: {message}" for message in exc.flat_messages()]}
            ) from exc

        session = self._sessions.get_active_session()
        summary = OrderSummary(
            order_id=str(uuid4()),
            placed_at=datetime.now(UTC),
            placed_by=session.email if session is not None else "",
            delivery_address=address,
            lines=tuple(OrderLine.from_cart_line(line) for line in lines),
            grand_total=cart.total(),
        )
        self._cart.complete_checkout(summary)
        self._orders.append(summary)

        logger.info(
            "checkout_completed",
            order_id=summary.order_id,
            lines=len(summary.lines),
            grand_total=format_amount(summary.grand_total, get_settings().currency),
        )
        return summary

    def _stock_conflicts(self, lines: list[CartLine]) -> dict[str, list[str]]:
        conflicts = {}
        for line in lines:
            product = self._ledger.find(line.product_id)
            if product is None:
                conflicts[str(line.product_id)] = [f'"{line.name}" is no longer available']
            elif line.quantity > product.stock:
                conflicts[str(line.product_id)] = [
                    f'Only {product.stock} of "{line.name}" available, {line.quantity} in cart'
                ]
        return conflicts
