"""Catalog card: the browse-page summary of every product still for sale.

Cards are created when a product is listed, follow its stock as checkouts
decrement it, and are deleted when it sells out.
"""

from datetime import UTC, datetime

from protean.core.projector import on
from protean.fields import DateTime, Decimal, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.events import ProductListed, StockChanged
from inventory.ledger.product import Product


@inventory.projection
class CatalogCard:
    product_id = Identifier(identifier=True, required=True)
    name = String(required=True, sanitize=False)
    price = Decimal(required=True)
    stock = Integer(default=0)
    seller_name = String(sanitize=False)
    updated_at = DateTime()


@inventory.projector(projector_for=CatalogCard, aggregates=[Product])
class CatalogCardProjector:
    @on(ProductListed)
    def on_product_listed(self, event):
        current_domain.repository_for(CatalogCard).add(
            CatalogCard(
                product_id=event.product_id,
                name=event.name,
                price=event.price,
                stock=event.stock,
                seller_name=event.seller_name,
                updated_at=datetime.now(UTC),
            )
        )

    @on(StockChanged)
    def on_stock_changed(self, event):
        repo = current_domain.repository_for(CatalogCard)
        card = repo.get_or_none(event.product_id)
        if card is None:
            return

        if event.removed:
            repo._dao.delete(card)
            return

        card.stock = event.new_stock
        card.updated_at = datetime.now(UTC)
        repo.add(card)
