"""Product aggregate, the listing input bundle, and the accepted fulfilment labels.

A product is created with stock >= 1 and only ever loses stock through
``decrement``. At zero it stays in the repository as a sold-out record so
the cart can tell "sold out" apart from "never listed".
"""

from datetime import UTC, datetime
from decimal import Decimal as PyDecimal
from enum import Enum

from protean import invariant
from protean.fields import DateTime, Decimal, Identifier, Integer, List, String, Text, ValueObject
from pydantic import BaseModel, Field

from inventory.domain import inventory
from inventory.ledger.events import ProductListed, StockChanged
from shared.errors import InsufficientStockError, ValidationError


class PaymentMethod(Enum):
    GCASH = "GCash"
    MAYA = "Maya"
    CASH_ON_DELIVERY = "Cash on Delivery"


class LogisticsMethod(Enum):
    LALAMOVE = "Lalamove"
    GRAB_EXPRESS = "Grab Express"
    JNT_EXPRESS = "J&T Express"
    MEET_UP = "Meet-up"


class ProductListing(BaseModel):
    """Field bundle handed over by the sell form.

    Shape is pre-validated by the caller; the ledger checks the values.
    """

    name: str = ""
    description: str = ""
    price: PyDecimal | None = None
    stock: int | None = None
    payment_methods: list[str] = Field(default_factory=list)
    logistics_methods: list[str] = Field(default_factory=list)
    image_url: str | None = None
    seller_name: str = ""
    seller_contact: str = ""
    seller_address: str = ""
    agreed_to_terms: bool = True


@inventory.value_object(part_of="Product")
class SellerContact:
    name = String(required=True, sanitize=False)
    contact = String(required=True, sanitize=False)
    address = String(required=True, max_length=500, sanitize=False)


@inventory.aggregate
class Product:
    id = Identifier(identifier=True)
    name = String(required=True, sanitize=False)
    description = Text(sanitize=False)
    price = Decimal(required=True, min_value=0)
    stock = Integer(required=True, min_value=0)
    payment_methods = List(String(sanitize=False))
    logistics_methods = List(String(sanitize=False))
    image_url = String(max_length=2048, sanitize=False)
    seller = ValueObject(SellerContact, required=True)
    listed_by = String(sanitize=False)
    listed_at = DateTime()

    @invariant.post
    def product_must_offer_payment_and_logistics(self):
        if not self.payment_methods:
            raise ValidationError({"payment_methods": ["Select at least one option"]})
        if not self.logistics_methods:
            raise ValidationError({"logistics_methods": ["Select at least one option"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        product_id,
        name,
        price,
        stock,
        payment_methods,
        logistics_methods,
        seller,
        description="",
        image_url=None,
        listed_by=None,
    ):
        product = cls(
            id=product_id,
            name=name,
            description=description,
            price=price,
            stock=stock,
            payment_methods=list(payment_methods),
            logistics_methods=list(logistics_methods),
            image_url=image_url,
            seller=seller,
            listed_by=listed_by,
            listed_at=datetime.now(UTC),
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                seller_name=seller.name,
                listed_by=listed_by,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def is_in_stock(self) -> bool:
        return self.stock > 0

    def decrement(self, quantity: int) -> None:
        """Take ``quantity`` units out of stock."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if quantity > self.stock:
            raise InsufficientStockError(
                {"quantity": [f"Insufficient stock: {self.stock} available, {quantity} requested"]}
            )

        previous_stock = self.stock
        self.stock = previous_stock - quantity

        self.raise_(
            StockChanged(
                product_id=str(self.id),
                previous_stock=previous_stock,
                new_stock=self.stock,
                removed=self.stock == 0,
            )
        )

    def searchable_text(self) -> str:
        return " ".join(
            [
                self.name,
                self.description or "",
                self.seller.name,
                *self.payment_methods,
                *self.logistics_methods,
            ]
        ).lower()
