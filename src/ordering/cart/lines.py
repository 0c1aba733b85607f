"""Cart line entity.

A line keeps a snapshot of the product taken when it was first added.
Catalog edits after that never reach the snapshot; only ``product_id`` is
used to re-check live stock when the line changes.
"""

from decimal import Decimal as PyDecimal
from enum import Enum

from protean.fields import Decimal, Identifier, Integer, List, String, Text

from ordering.domain import ordering


class SelectionField(Enum):
    PAYMENT = "payment"
    LOGISTICS = "logistics"


@ordering.entity(part_of="ShoppingCart")
class CartLine:
    product_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    unit_price = Decimal(required=True, min_value=0)
    description = Text(sanitize=False)
    image_url = String(max_length=2048, sanitize=False)
    seller_name = String(sanitize=False)
    seller_contact = String(sanitize=False)
    seller_address = String(max_length=500, sanitize=False)
    payment_options = List(String(sanitize=False))
    logistics_options = List(String(sanitize=False))
    quantity = Integer(required=True, min_value=1)
    payment_method = String(required=True, sanitize=False)
    logistics_method = String(required=True, sanitize=False)

    @classmethod
    def start(cls, product):
        """A new line of one unit, defaulting to the first accepted option of each kind."""
        return cls(
            product_id=str(product.id),
            name=product.name,
            unit_price=product.price,
            description=product.description or "",
            image_url=product.image_url,
            seller_name=product.seller.name,
            seller_contact=product.seller.contact,
            seller_address=product.seller.address,
            payment_options=list(product.payment_methods),
            logistics_options=list(product.logistics_methods),
            quantity=1,
            payment_method=product.payment_methods[0],
            logistics_method=product.logistics_methods[0],
        )

    def subtotal(self) -> PyDecimal:
        return self.unit_price * self.quantity

    def accepted(self, field: SelectionField) -> list[str]:
        if field is SelectionField.PAYMENT:
            return list(self.payment_options)
        return list(self.logistics_options)

    def as_payload(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "unit_price": str(self.unit_price),
            "quantity": self.quantity,
            "payment_method": self.payment_method,
            "logistics_method": self.logistics_method,
        }
