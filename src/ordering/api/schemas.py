"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
cart's line entities and the order summary.
"""

import json
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from inventory.api.schemas import SellerContactSchema
from ordering.cart.lines import CartLine, SelectionField
from ordering.checkout.summary import OrderSummary


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str


class UpdateCartQuantityRequest(BaseModel):
    delta: int


class SetSelectionRequest(BaseModel):
    field: SelectionField
    value: str


class CheckoutRequest(BaseModel):
    delivery_address: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "delivery_address": "Unit 4B, 88 Katipunan Ave, Quezon City",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    image_url: str | None = None
    payment_method: str
    logistics_method: str
    payment_options: list[str]
    logistics_options: list[str]

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineSchema":
        return cls(
            product_id=str(line.product_id),
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            subtotal=line.subtotal(),
            image_url=line.image_url,
            payment_method=line.payment_method,
            logistics_method=line.logistics_method,
            payment_options=list(line.payment_options),
            logistics_options=list(line.logistics_options),
        )


class CartResponse(BaseModel):
    cart_id: str
    lines: list[CartLineSchema]
    count: int
    total: Decimal


class CartViewLineSchema(BaseModel):
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    payment_method: str
    logistics_method: str


class CartViewResponse(BaseModel):
    cart_id: str
    lines: list[CartViewLineSchema]
    line_count: int
    total: Decimal
    last_change: str | None = None
    last_order_id: str | None = None

    @classmethod
    def from_view(cls, view) -> "CartViewResponse":
        return cls(
            cart_id=str(view.cart_id),
            lines=[CartViewLineSchema(**line) for line in json.loads(view.lines or "[]")],
            line_count=view.line_count,
            total=view.total,
            last_change=view.last_change,
            last_order_id=view.last_order_id,
        )


class OrderLineSchema(BaseModel):
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    seller: SellerContactSchema
    payment_method: str
    logistics_method: str


class OrderSummaryResponse(BaseModel):
    order_id: str
    placed_at: datetime
    placed_by: str
    delivery_address: str
    lines: list[OrderLineSchema]
    grand_total: Decimal

    @classmethod
    def from_summary(cls, summary: OrderSummary) -> "OrderSummaryResponse":
        return cls(
            order_id=summary.order_id,
            placed_at=summary.placed_at,
            placed_by=summary.placed_by,
            delivery_address=summary.delivery_address,
            lines=[
                OrderLineSchema(
                    product_id=line.product_id,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                    seller=SellerContactSchema(
                        name=line.seller_name,
                        contact=line.seller_contact,
                        address=line.seller_address,
                    ),
                    payment_method=line.payment_method,
                    logistics_method=line.logistics_method,
                )
                for line in summary.lines
            ],
            grand_total=summary.grand_total,
        )
