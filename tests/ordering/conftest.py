from decimal import Decimal

import pytest


@pytest.fixture()
def cart(storefront, shopper):
    return storefront.cart


@pytest.fixture()
def ledger(storefront):
    return storefront.ledger


@pytest.fixture()
def list_product(storefront, shopper, make_listing):
    def _list_product(**overrides):
        return storefront.list_product(make_listing(**overrides))

    return _list_product


@pytest.fixture()
def product_a(list_product):
    return list_product(name="Product A", price=Decimal("100"), stock=5)


@pytest.fixture()
def product_b(list_product):
    return list_product(
        name="Product B",
        price=Decimal("50"),
        stock=2,
        payment_methods=["Maya"],
        logistics_methods=["J&T Express", "Grab Express"],
    )

