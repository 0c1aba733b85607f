"""Tests for per-line payment and logistics choices."""

import json

import pytest
from ordering.cart.lines import SelectionField
from shared.errors import InvalidSelectionError, NotFoundError


class TestSetSelection:
    def test_set_payment_method(self, cart, product_a):
        cart.add_to_cart(product_a.id)
        line = cart.set_selection(product_a.id, "payment", "Cash on Delivery")
        assert line.payment_method == "Cash on Delivery"
        assert cart.get_line(product_a.id).payment_method == "Cash on Delivery"

    def test_set_logistics_method_with_enum_field(self, cart, product_b):
        cart.add_to_cart(product_b.id)
        line = cart.set_selection(product_b.id, SelectionField.LOGISTICS, "Grab Express")
        assert line.logistics_method == "Grab Express"
        assert line.payment_method == "Maya"

    def test_value_not_offered_by_product(self, cart, product_b):
        cart.add_to_cart(product_b.id)
        with pytest.raises(InvalidSelectionError) as exc_info:
            cart.set_selection(product_b.id, "payment", "GCash")
        assert "payment" in exc_info.value.messages
        assert cart.get_line(product_b.id).payment_method == "Maya"

    def test_logistics_label_is_not_a_payment_method(self, cart, product_a):
        cart.add_to_cart(product_a.id)
        with pytest.raises(InvalidSelectionError):
            cart.set_selection(product_a.id, "payment", "Lalamove")

    def test_unknown_field(self, cart, product_a):
        cart.add_to_cart(product_a.id)
        with pytest.raises(InvalidSelectionError) as exc_info:
            cart.set_selection(product_a.id, "gift_wrap", "yes")
        assert "field" in exc_info.value.messages

    def test_line_must_exist(self, cart, product_a):
        with pytest.raises(NotFoundError):
            cart.set_selection(product_a.id, "payment", "GCash")

    def test_selection_survives_quantity_change(self, cart, product_a):
        cart.add_to_cart(product_a.id)
        cart.set_selection(product_a.id, "logistics", "Meet-up")
        cart.update_quantity(product_a.id, +1)
        assert cart.get_line(product_a.id).logistics_method == "Meet-up"

    def test_selection_raises_cart_changed(self, cart, product_a, ordering_events):
        cart.add_to_cart(product_a.id)
        cart.set_selection(product_a.id, "payment", "Cash on Delivery")

        changes = ordering_events("CartChanged")
        assert [e["change"] for e in changes] == ["item_added", "selection_changed"]
        assert changes[-1]["product_id"] == product_a.id
        assert json.loads(changes[-1]["lines"])[0]["payment_method"] == "Cash on Delivery"
