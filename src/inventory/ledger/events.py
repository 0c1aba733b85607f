"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Decimal, Identifier, Integer, String

from inventory.domain import inventory


@inventory.event(part_of="Product")
class ProductListed:
    """A seller listed a new product in the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    price = Decimal(required=True)
    stock = Integer(required=True)
    seller_name = String(sanitize=False)
    listed_by = String(sanitize=False)


@inventory.event(part_of="Product")
class StockChanged:
    """A product's stock went down; ``removed`` is set when it left the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    removed = Boolean(default=False)
