"""Pydantic request/response schemas for the Inventory API.

These are external contracts, kept separate from the ledger's own models.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from inventory.ledger.product import Product


class ListProductRequest(BaseModel):
    name: str = ""
    description: str = ""
    price: Decimal | None = None
    stock: int | None = None
    payment_methods: list[str] = Field(default_factory=list)
    logistics_methods: list[str] = Field(default_factory=list)
    image_url: str | None = None
    seller_name: str = ""
    seller_contact: str = ""
    seller_address: str = ""
    agreed_to_terms: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Handwoven abaca bag",
                    "description": "Made in Bicol",
                    "price": "750.00",
                    "stock": 5,
                    "payment_methods": ["GCash", "Cash on Delivery"],
                    "logistics_methods": ["Lalamove", "Meet-up"],
                    "seller_name": "Ana Reyes",
                    "seller_contact": "0917 123 4567",
                    "seller_address": "Legazpi City, Albay",
                    "agreed_to_terms": True,
                }
            ]
        }
    }


class SellerContactSchema(BaseModel):
    name: str
    contact: str
    address: str


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    stock: int
    payment_methods: list[str]
    logistics_methods: list[str]
    image_url: str | None = None
    seller: SellerContactSchema
    listed_at: datetime

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description or "",
            price=product.price,
            stock=product.stock,
            payment_methods=list(product.payment_methods),
            logistics_methods=list(product.logistics_methods),
            image_url=product.image_url,
            seller=SellerContactSchema(
                name=product.seller.name,
                contact=product.seller.contact,
                address=product.seller.address,
            ),
            listed_at=product.listed_at,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    count: int


class CatalogCardResponse(BaseModel):
    product_id: str
    name: str
    price: Decimal
    stock: int
    seller_name: str | None = None


class CatalogCardListResponse(BaseModel):
    cards: list[CatalogCardResponse]
    count: int
