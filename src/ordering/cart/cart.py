"""Shopping Cart aggregate: line items bounded by live stock in the inventory ledger.

Every mutating method validates first, builds the new state's payload
next, and mutates last, so a raised error leaves the cart exactly as it
was. After a successful mutation each line satisfies
``1 <= quantity <= live stock`` and a ``CartChanged`` event carries the
new lines and total.

The aggregate never reads the ledger itself: callers pass in the live
``Product`` (or its stock) they looked up.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.fields import DateTime, HasMany

from ordering.cart.events import CartChange, CartChanged, CheckoutCompleted
from ordering.cart.lines import CartLine, SelectionField
from ordering.domain import ordering
from shared.errors import InvalidSelectionError, NotFoundError, StockExceededError, ValidationError
from shared.money import ZERO, to_amount


def _total_of(states) -> Decimal:
    try:
        return to_amount(sum((Decimal(state["unit_price"]) * state["quantity"] for state in states), ZERO))
    except ValueError:
        raise ValidationError({"cart": ["Cart total is too large"]}) from None


@ordering.aggregate
class ShoppingCart:
    lines = HasMany(CartLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def each_product_appears_on_one_line(self):
        product_ids = [str(line.product_id) for line in self.lines]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"lines": ["A product can only appear on one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        now = datetime.now(UTC)
        return cls(created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_line(self, product_id) -> CartLine | None:
        return next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

    def require_line(self, product_id) -> CartLine:
        line = self.get_line(product_id)
        if line is None:
            raise NotFoundError({"product_id": [f"Product {product_id} is not in the cart"]})
        return line

    def total(self) -> Decimal:
        return _total_of(line.as_payload() for line in self.lines)

    def _states(self) -> dict[str, dict]:
        return {str(line.product_id): line.as_payload() for line in self.lines}

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product) -> CartLine:
        """Add one unit of ``product``, or bump its existing line by one."""
        product_id = str(product.id)
        states = self._states()
        existing = self.get_line(product_id)

        if existing is not None:
            if existing.quantity + 1 > product.stock:
                raise StockExceededError({"quantity": [f'Only {product.stock} of "{product.name}" available']})
            states[product_id]["quantity"] += 1
            change = CartChange.QUANTITY_UPDATED
        else:
            existing = CartLine.start(product)
            states[product_id] = existing.as_payload()
            change = CartChange.ITEM_ADDED

        payload = list(states.values())
        total = _total_of(payload)

        if change is CartChange.ITEM_ADDED:
            self.add_lines(existing)
        else:
            existing.quantity += 1

        self._changed(change, product_id, payload, total)
        return existing

    def update_quantity(self, product_id, delta: int, live_stock: int) -> CartLine | None:
        """Shift a line's quantity by ``delta``; dropping below one removes the line.

        Returns the updated line, or None when the line was removed.
        """
        line = self.require_line(product_id)
        new_quantity = line.quantity + delta
        states = self._states()

        if new_quantity < 1:
            del states[str(line.product_id)]
            payload = list(states.values())
            total = _total_of(payload)
            self.remove_lines(line)
            self._changed(CartChange.ITEM_REMOVED, line.product_id, payload, total)
            return None

        if new_quantity > live_stock:
            raise StockExceededError(
                {"quantity": [f'Only {live_stock} of "{line.name}" available, {new_quantity} requested']}
            )

        states[str(line.product_id)]["quantity"] = new_quantity
        payload = list(states.values())
        total = _total_of(payload)

        line.quantity = new_quantity
        self._changed(CartChange.QUANTITY_UPDATED, line.product_id, payload, total)
        return line

    def remove_item(self, product_id) -> bool:
        """Drop the line for ``product_id``; False when there was none."""
        line = self.get_line(product_id)
        if line is None:
            return False

        states = self._states()
        del states[str(line.product_id)]
        payload = list(states.values())
        total = _total_of(payload)

        self.remove_lines(line)
        self._changed(CartChange.ITEM_REMOVED, line.product_id, payload, total)
        return True

    # -------------------------------------------------------------------
    # Fulfilment choices
    # -------------------------------------------------------------------
    def select(self, product_id, field, value: str) -> CartLine:
        """Choose the payment or logistics method for a line from what the product accepts."""
        line = self.require_line(product_id)

        try:
            field = SelectionField(field)
        except ValueError:
            raise InvalidSelectionError(
                {"field": [f"Field must be one of: {', '.join(f.value for f in SelectionField)}"]}
            ) from None

        accepted = line.accepted(field)
        if value not in accepted:
            raise InvalidSelectionError(
                {field.value: [f"{value!r} is not offered; choose one of: {', '.join(accepted)}"]}
            )

        attr = "payment_method" if field is SelectionField.PAYMENT else "logistics_method"
        states = self._states()
        states[str(line.product_id)][attr] = value
        payload = list(states.values())
        total = _total_of(payload)

        setattr(line, attr, value)
        self._changed(CartChange.SELECTION_CHANGED, line.product_id, payload, total)
        return line

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def clear(self) -> None:
        if not self.lines:
            return
        for line in list(self.lines):
            self.remove_lines(line)
        self._changed(CartChange.CLEARED, None, [], ZERO)

    def complete_checkout(self, order) -> None:
        """Empty the cart after ``order`` was committed against the ledger."""
        for line in list(self.lines):
            self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CheckoutCompleted(
                cart_id=str(self.id),
                order_id=order.order_id,
                placed_by=order.placed_by,
                delivery_address=order.delivery_address,
                grand_total=order.grand_total,
                lines=json.dumps([line.as_payload() for line in order.lines]),
                placed_at=order.placed_at,
            )
        )

    def _changed(self, change: CartChange, product_id, payload: list[dict], total: Decimal) -> None:
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartChanged(
                cart_id=str(self.id),
                change=change.value,
                product_id=str(product_id) if product_id is not None else None,
                line_count=len(payload),
                total=total,
                lines=json.dumps(payload),
            )
        )
