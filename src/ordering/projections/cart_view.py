"""Cart view: current cart state for UI rendering, plus the last order placed from it."""

import json

from protean.core.projector import on
from protean.fields import Decimal, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartChanged, CheckoutCompleted
from ordering.domain import ordering


@ordering.projection
class CartView:
    cart_id = Identifier(identifier=True, required=True)
    lines = Text(sanitize=False)  # JSON: list of {product_id, name, unit_price, quantity, ...}
    line_count = Integer(default=0)
    total = Decimal(default=0)
    last_change = String()
    last_order_id = Identifier()


def _get_or_create(cart_id):
    repo = current_domain.repository_for(CartView)
    view = repo.get_or_none(cart_id)
    if view is None:
        view = CartView(cart_id=cart_id, lines="[]", line_count=0)
    return view


@ordering.projector(projector_for=CartView, aggregates=[ShoppingCart])
class CartViewProjector:
    @on(CartChanged)
    def on_cart_changed(self, event):
        view = _get_or_create(event.cart_id)
        view.lines = event.lines
        view.line_count = event.line_count
        view.total = event.total
        view.last_change = event.change
        current_domain.repository_for(CartView).add(view)

    @on(CheckoutCompleted)
    def on_checkout_completed(self, event):
        view = _get_or_create(event.cart_id)
        view.lines = json.dumps([])
        view.line_count = 0
        view.total = 0
        view.last_change = "checked_out"
        view.last_order_id = event.order_id
        current_domain.repository_for(CartView).add(view)
