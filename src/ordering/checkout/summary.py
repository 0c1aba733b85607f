"""Order summary produced by a successful checkout."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from ordering.cart.lines import CartLine


class OrderLine(BaseModel):
    model_config = {"frozen": True}

    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    seller_name: str
    seller_contact: str
    seller_address: str
    payment_method: str
    logistics_method: str

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLine":
        return cls(
            product_id=str(line.product_id),
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            subtotal=line.subtotal(),
            seller_name=line.seller_name or "",
            seller_contact=line.seller_contact or "",
            seller_address=line.seller_address or "",
            payment_method=line.payment_method,
            logistics_method=line.logistics_method,
        )

    def as_payload(self) -> dict:
        return self.model_dump(mode="json")


class OrderSummary(BaseModel):
    model_config = {"frozen": True}

    order_id: str
    placed_at: datetime
    placed_by: str
    delivery_address: str
    lines: tuple[OrderLine, ...]
    grand_total: Decimal
