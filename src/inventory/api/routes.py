"""FastAPI endpoints for the Inventory domain: listing and browsing products."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from inventory.api.schemas import (
    CatalogCardListResponse,
    CatalogCardResponse,
    ListProductRequest,
    ProductListResponse,
    ProductResponse,
    SellerContactSchema,
)
from inventory.domain import inventory
from inventory.ledger.product import ProductListing
from inventory.projections.catalog_card import CatalogCard
from storefront.context import Storefront
from storefront.web import get_storefront

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def browse_products(
    q: str = "",
    price_band: str | None = None,
    storefront: Storefront = Depends(get_storefront),
) -> ProductListResponse:
    products = storefront.ledger.search(query=q, price_band=price_band or None)
    return ProductListResponse(
        products=[ProductResponse.from_product(p) for p in products],
        count=len(products),
    )


@product_router.post("", status_code=201, response_model=ProductResponse)
async def list_product(body: ListProductRequest, storefront: Storefront = Depends(get_storefront)) -> ProductResponse:
    listing = ProductListing(**body.model_dump())
    product = storefront.list_product(listing)
    return ProductResponse.from_product(product)


@product_router.get("/cards", response_model=CatalogCardListResponse)
async def catalog_cards() -> CatalogCardListResponse:
    with inventory.domain_context():
        cards = current_domain.repository_for(CatalogCard).query.limit(None).all().items
    cards = sorted(cards, key=lambda card: int(card.product_id))
    return CatalogCardListResponse(
        cards=[
            CatalogCardResponse(
                product_id=str(card.product_id),
                name=card.name,
                price=card.price,
                stock=card.stock,
                seller_name=card.seller_name,
            )
            for card in cards
        ],
        count=len(cards),
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, storefront: Storefront = Depends(get_storefront)) -> ProductResponse:
    return ProductResponse.from_product(storefront.ledger.lookup(product_id))


@product_router.get("/{product_id}/seller", response_model=SellerContactSchema)
async def contact_seller(product_id: str, storefront: Storefront = Depends(get_storefront)) -> SellerContactSchema:
    seller = storefront.ledger.seller_contact(product_id)
    return SellerContactSchema(name=seller.name, contact=seller.contact, address=seller.address)
