"""Domain events for the ShoppingCart aggregate."""

from enum import Enum

from protean.fields import DateTime, Decimal, Identifier, Integer, String, Text

from ordering.domain import ordering


class CartChange(Enum):
    ITEM_ADDED = "item_added"
    QUANTITY_UPDATED = "quantity_updated"
    ITEM_REMOVED = "item_removed"
    SELECTION_CHANGED = "selection_changed"
    CLEARED = "cleared"


@ordering.event(part_of="ShoppingCart")
class CartChanged:
    """The cart's lines or their selections changed; carries the full new state."""

    __version__ = 1

    cart_id = Identifier(required=True)
    change = String(required=True, choices=CartChange)
    product_id = Identifier()
    line_count = Integer(default=0)
    total = Decimal(required=True)
    lines = Text(sanitize=False)  # JSON: list of {product_id, name, unit_price, quantity, payment_method, ...}


@ordering.event(part_of="ShoppingCart")
class CheckoutCompleted:
    """Every cart line was committed against the ledger and the cart was cleared."""

    __version__ = 1

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    placed_by = String(sanitize=False)
    delivery_address = String(max_length=500, sanitize=False)
    grand_total = Decimal(required=True)
    lines = Text(sanitize=False)  # JSON: the order lines
    placed_at = DateTime()
