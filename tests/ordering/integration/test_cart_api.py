"""Integration tests for cart and checkout endpoints via TestClient."""

from decimal import Decimal


def _add(client, product_id):
    """Helper: POST /cart/items."""
    return client.post("/cart/items", json={"product_id": product_id})


class TestCartItemEndpoints:
    def test_view_empty_cart(self, client):
        response = client.get("/cart")
        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert Decimal(str(response.json()["total"])) == Decimal("0")

    def test_add_item(self, logged_in_client, post_product):
        product = post_product()
        response = _add(logged_in_client, product["id"])
        assert response.status_code == 200

        body = response.json()
        assert body["count"] == 1
        line = body["lines"][0]
        assert line["quantity"] == 1
        assert line["payment_method"] == "GCash"
        assert line["logistics_options"] == ["Lalamove", "Meet-up"]

    def test_add_requires_login(self, logged_in_client, post_product):
        product = post_product()
        logged_in_client.post("/accounts/logout")
        response = _add(logged_in_client, product["id"])
        assert response.status_code == 401

    def test_update_quantity(self, logged_in_client, post_product):
        product = post_product(stock=2)
        _add(logged_in_client, product["id"])

        response = logged_in_client.patch(f"/cart/items/{product['id']}", json={"delta": 1})
        assert response.status_code == 200
        assert response.json()["lines"][0]["quantity"] == 2

        response = logged_in_client.patch(f"/cart/items/{product['id']}", json={"delta": 1})
        assert response.status_code == 409
        assert response.json()["error"] == "stock_exceeded"

    def test_update_sold_out_line(self, logged_in_client, post_product, storefront):
        product = post_product(stock=1)
        _add(logged_in_client, product["id"])
        storefront.ledger.decrement_stock(product["id"], 1)

        response = logged_in_client.patch(f"/cart/items/{product['id']}", json={"delta": 1})
        assert response.status_code == 409
        assert response.json()["error"] == "out_of_stock"

    def test_update_to_zero_removes(self, logged_in_client, post_product):
        product = post_product()
        _add(logged_in_client, product["id"])
        response = logged_in_client.patch(f"/cart/items/{product['id']}", json={"delta": -1})
        assert response.json()["count"] == 0

    def test_remove_item_is_idempotent(self, logged_in_client, post_product):
        product = post_product()
        _add(logged_in_client, product["id"])
        assert logged_in_client.delete(f"/cart/items/{product['id']}").json()["count"] == 0
        assert logged_in_client.delete(f"/cart/items/{product['id']}").status_code == 200

    def test_set_selection(self, logged_in_client, post_product):
        product = post_product()
        _add(logged_in_client, product["id"])

        response = logged_in_client.put(
            f"/cart/items/{product['id']}/selection",
            json={"field": "logistics", "value": "Meet-up"},
        )
        assert response.status_code == 200
        assert response.json()["lines"][0]["logistics_method"] == "Meet-up"

        response = logged_in_client.put(
            f"/cart/items/{product['id']}/selection",
            json={"field": "payment", "value": "Maya"},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_selection"


class TestCheckoutEndpoint:
    def test_checkout(self, logged_in_client, post_product, storefront):
        product = post_product(price="120.50", stock=3)
        _add(logged_in_client, product["id"])
        logged_in_client.patch(f"/cart/items/{product['id']}", json={"delta": 1})

        response = logged_in_client.post("/cart/checkout", json={"delivery_address": "Cebu City"})
        assert response.status_code == 201

        summary = response.json()
        assert Decimal(str(summary["grand_total"])) == Decimal("241.00")
        assert summary["lines"][0]["seller"]["name"] == "Ana Reyes"
        assert storefront.ledger.lookup(product["id"]).stock == 1
        assert logged_in_client.get("/cart").json()["count"] == 0

    def test_checkout_empty_cart(self, logged_in_client):
        response = logged_in_client.post("/cart/checkout", json={"delivery_address": "Cebu City"})
        assert response.status_code == 409
        assert response.json()["error"] == "empty_cart"

    def test_checkout_blank_address(self, logged_in_client, post_product, storefront):
        product = post_product()
        _add(logged_in_client, product["id"])

        response = logged_in_client.post("/cart/checkout", json={"delivery_address": "  "})
        assert response.status_code == 400
        assert storefront.ledger.lookup(product["id"]).stock == 5
        assert logged_in_client.get("/cart").json()["count"] == 1


class TestCartViewEndpoint:
    def test_view_before_any_change(self, client):
        response = client.get("/cart/view")
        assert response.status_code == 200
        assert response.json()["lines"] == []
        assert response.json()["line_count"] == 0

    def test_view_tracks_cart(self, logged_in_client, post_product):
        product = post_product(price="75.25")
        cart_id = _add(logged_in_client, product["id"]).json()["cart_id"]
        logged_in_client.put(
            f"/cart/items/{product['id']}/selection",
            json={"field": "payment", "value": "Cash on Delivery"},
        )

        view = logged_in_client.get("/cart/view").json()
        assert view["cart_id"] == cart_id
        assert view["last_change"] == "selection_changed"
        assert view["lines"][0]["payment_method"] == "Cash on Delivery"
        assert Decimal(str(view["total"])) == Decimal("75.25")
