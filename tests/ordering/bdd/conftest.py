"""Shared BDD fixtures and step definitions for the Ordering domain."""

from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, then
from shared.errors import MarketplaceError


@pytest.fixture()
def error():
    """Container for the error a When step captured."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Products listed by Given steps, keyed by name."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shopper is logged in")
def shopper_logged_in(shopper):
    return shopper


@given(parsers.cfparse('a product "{name}" priced {price} with {stock:d} in stock'))
def listed_product(list_product, products, name, price, stock):
    products[name] = list_product(name=name, price=Decimal(price), stock=stock)


@given(parsers.cfparse('the shopper has put {quantity:d} of "{name}" in the cart'))
def put_in_cart(cart, products, quantity, name):
    product_id = products[name].id
    cart.add_to_cart(product_id)
    if quantity > 1:
        cart.update_quantity(product_id, quantity - 1)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart holds {quantity:d} of "{name}"'))
def cart_holds(cart, products, quantity, name):
    line = cart.get_line(products[name].id)
    assert line is not None, f'"{name}" is not in the cart'
    assert line.quantity == quantity


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(cart, count):
    assert cart.count == count


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.is_empty


@then(parsers.cfparse('the action fails with a "{code}" error'))
def action_fails(error, code):
    assert error["exc"] is not None, "Expected an error but none was raised"
    assert isinstance(error["exc"], MarketplaceError)
    assert error["exc"].code == code


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def stock_is(ledger, products, name, stock):
    assert ledger.lookup(products[name].id).stock == stock
