"""Inventory Ledger: the authoritative record of listed products and their stock.

Stock Model:
    A product is listed with stock >= 1. Checkout decrements it. When it
    reaches 0 the product drops out of every catalog query and later
    lookups fail with NotFoundError, so stock is never observed below 1
    in the catalog and never negative anywhere.

Products live in the inventory domain's repository. Each public method
activates the inventory domain context itself, so callers in other
contexts can use the ledger directly. ``decrement_stock`` joins the
caller's unit of work when one is open; checkout relies on that to
commit or roll back a whole cart at once.
"""

import time
from decimal import Decimal

from protean.utils.globals import current_domain

from inventory.domain import inventory, logger
from inventory.ledger.product import LogisticsMethod, PaymentMethod, Product, ProductListing, SellerContact
from inventory.ledger.search import PriceBand, filter_products
from shared.config import get_settings
from shared.errors import NotFoundError, ValidationError
from shared.money import format_amount, to_amount

_PAYMENT_LABELS = [m.value for m in PaymentMethod]
_LOGISTICS_LABELS = [m.value for m in LogisticsMethod]


def _accepted_labels(selected, known, field, errors) -> tuple[str, ...]:
    """De-duplicate ``selected`` keeping order; record errors for blanks and unknown labels."""
    labels = []
    for label in selected or []:
        label = (label or "").strip()
        if label and label not in labels:
            labels.append(label)

    unknown = [label for label in labels if label not in known]
    if unknown:
        errors[field] = [f"Unsupported option(s): {', '.join(unknown)}"]
    elif not labels:
        errors[field] = ["Select at least one option"]
    return tuple(labels)


class InventoryLedger:
    def __init__(self):
        self._last_id = 0

    # -------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------
    def add_product(self, fields: ProductListing, listed_by: str | None = None) -> Product:
        """Validate a listing and register it as a new product."""
        settings = get_settings()
        errors = {}

        name = fields.name.strip()
        if not name:
            errors["name"] = ["Product name is required"]

        price = None
        too_expensive = f"Price must not exceed {format_amount(settings.price_max, settings.currency)}"
        if fields.price is None:
            errors["price"] = ["Price is required"]
        else:
            try:
                price = to_amount(fields.price)
            except ValueError:
                finite = isinstance(fields.price, Decimal) and fields.price.is_finite()
                errors["price"] = [too_expensive if finite else "Price must be a number"]
            else:
                if price <= 0:
                    errors["price"] = ["Price must be greater than zero"]
                elif price > settings.price_max:
                    errors["price"] = [too_expensive]

        if fields.stock is None:
            errors["stock"] = ["Stock is required"]
        elif fields.stock < 1:
            errors["stock"] = ["Stock must be at least 1"]
        elif fields.stock > settings.stock_max:
            errors["stock"] = [f"Stock must not exceed {settings.stock_max:,}"]

        for attr, label in (
            ("seller_name", "Seller name"),
            ("seller_contact", "Seller contact"),
            ("seller_address", "Seller address"),
        ):
            if not getattr(fields, attr).strip():
                errors[attr] = [f"{label} is required"]

        payment_methods = _accepted_labels(fields.payment_methods, _PAYMENT_LABELS, "payment_methods", errors)
        logistics_methods = _accepted_labels(fields.logistics_methods, _LOGISTICS_LABELS, "logistics_methods", errors)

        if not fields.agreed_to_terms:
            errors["agreed_to_terms"] = ["You must agree to the Terms & Conditions"]

        if errors:
            logger.info("product_listing_rejected", fields=sorted(errors))
            raise ValidationError(errors)

        with inventory.domain_context():
            product = Product.create(
                product_id=self._next_id(),
                name=name,
                description=fields.description.strip(),
                price=price,
                stock=fields.stock,
                payment_methods=payment_methods,
                logistics_methods=logistics_methods,
                image_url=fields.image_url or None,
                seller=SellerContact(
                    name=fields.seller_name.strip(),
                    contact=fields.seller_contact.strip(),
                    address=fields.seller_address.strip(),
                ),
                listed_by=listed_by,
            )
            current_domain.repository_for(Product).add(product)

        logger.info("product_listed", product_id=product.id, stock=product.stock, price=str(product.price))
        return product

    def _next_id(self) -> str:
        """Millisecond timestamp, bumped past the previous id if the clock repeats."""
        self._last_id = max(self._last_id + 1, time.time_ns() // 1_000_000)
        return str(self._last_id)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find(self, product_id) -> Product | None:
        """The product if it is still in the catalog."""
        with inventory.domain_context():
            product = current_domain.repository_for(Product).get_or_none(str(product_id))
        if product is None or not product.is_in_stock():
            return None
        return product

    def lookup(self, product_id) -> Product:
        product = self.find(product_id)
        if product is None:
            raise NotFoundError({"product_id": [f"Product {product_id} not found"]})
        return product

    def products(self) -> list[Product]:
        """Every in-stock product, oldest listing first."""
        with inventory.domain_context():
            products = current_domain.repository_for(Product).query.filter(stock__gt=0).limit(None).all().items
        return sorted(products, key=lambda product: int(product.id))

    def search(self, query: str = "", price_band: PriceBand | str | None = None) -> list[Product]:
        try:
            return filter_products(self.products(), query=query, price_band=price_band)
        except ValueError:
            raise ValidationError(
                {"price_band": [f"Price band must be one of: {', '.join(b.value for b in PriceBand)}"]}
            ) from None

    def seller_contact(self, product_id) -> SellerContact:
        return self.lookup(product_id).seller

    def is_sold_out(self, product_id) -> bool:
        """True for a product that was listed here and left the catalog at zero stock."""
        with inventory.domain_context():
            product = current_domain.repository_for(Product).get_or_none(str(product_id))
        return product is not None and not product.is_in_stock()

    def __len__(self):
        return len(self.products())

    def __contains__(self, product_id):
        return self.find(product_id) is not None

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def decrement_stock(self, product_id, quantity: int) -> Product:
        """Take ``quantity`` units out of stock; at zero the product leaves the catalog."""
        with inventory.domain_context():
            product = self.lookup(product_id)
            product.decrement(quantity)
            current_domain.repository_for(Product).add(product)

        logger.info(
            "stock_decremented",
            product_id=product.id,
            quantity=quantity,
            new_stock=product.stock,
            removed=not product.is_in_stock(),
        )
        return product
