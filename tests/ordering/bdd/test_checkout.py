"""BDD tests for the all-or-nothing checkout."""

from decimal import Decimal

from pytest_bdd import parsers, scenarios, then, when
from shared.errors import MarketplaceError

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper checks out to "{address}"'), target_fixture="order")
def checkout_to(storefront, address, error):
    try:
        return storefront.checkout.checkout(address)
    except MarketplaceError as exc:
        error["exc"] = exc
        return None


@when("the shopper checks out with a blank delivery address", target_fixture="order")
def checkout_without_address(storefront, error):
    try:
        return storefront.checkout.checkout("   ")
    except MarketplaceError as exc:
        error["exc"] = exc
        return None


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total}"))
def cart_total_is(cart, total):
    assert cart.total() == Decimal(total)


@then(parsers.cfparse("the order grand total is {total}"))
def order_total_is(order, total):
    assert order is not None
    assert order.grand_total == Decimal(total)


@then(parsers.cfparse('"{name}" is no longer in the catalog'))
def no_longer_listed(ledger, products, name):
    assert products[name].id not in ledger


@then("no order was placed")
def no_order_placed(storefront):
    assert storefront.checkout.orders == []
