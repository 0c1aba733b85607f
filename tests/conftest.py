import os
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pin the environment before any domain or settings object reads (and caches) it."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["TINDAHAN_ENVIRONMENT"] = session.config.option.env

    from shared.config import get_settings

    get_settings.cache_clear()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domain lifecycle
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def inventory_bed():
    from inventory.domain import inventory

    bed = DomainFixture(inventory)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(identity_bed, inventory_bed, ordering_bed):
    """Every test touches all three contexts; each is reset when the test ends."""
    with identity_bed.domain_context(), inventory_bed.domain_context(), ordering_bed.domain_context():
        yield


@pytest.fixture()
def stored_events():
    """Messages committed to a domain's event store with one of ``event_types``, oldest first."""

    def _stored_events(domain, stream_category, *event_types):
        with domain.domain_context():
            messages = domain.event_store.store.read(stream_category)
        return [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type in event_types
        ]

    return _stored_events


@pytest.fixture()
def inventory_events(stored_events):
    """Committed inventory events of one type, e.g. ``inventory_events("StockChanged")``."""
    from inventory.domain import inventory

    def _inventory_events(name):
        return [m.data for m in stored_events(inventory, "inventory::product", f"Inventory.{name}.v1")]

    return _inventory_events


@pytest.fixture()
def ordering_events(stored_events):
    """Committed cart events of one type, e.g. ``ordering_events("CartChanged")``."""
    from ordering.domain import ordering

    def _ordering_events(name):
        return [m.data for m in stored_events(ordering, "ordering::shopping_cart", f"Ordering.{name}.v1")]

    return _ordering_events


# ---------------------------------------------------------------------------
# Storefront
# ---------------------------------------------------------------------------
@pytest.fixture()
def storefront():
    from storefront.context import Storefront

    return Storefront()


@pytest.fixture()
def shopper(storefront):
    """Register (and thereby log in) a shopper on the storefront."""
    return storefront.accounts.register(
        name="Juan dela Cruz",
        address="123 Rizal Ave, Manila",
        email="juan@example.ph",
        password="pa55word",
    )


@pytest.fixture()
def make_listing():
    from inventory.ledger.product import ProductListing

    def _make_listing(**overrides):
        defaults = {
            "name": "Native Coffee Beans",
            "description": "Barako, 500g",
            "price": Decimal("100.00"),
            "stock": 5,
            "payment_methods": ["GCash", "Cash on Delivery"],
            "logistics_methods": ["Lalamove", "Meet-up"],
            "seller_name": "Ana Reyes",
            "seller_contact": "0917 123 4567",
            "seller_address": "Batangas City",
            "agreed_to_terms": True,
        }
        defaults.update(overrides)
        return ProductListing(**defaults)

    return _make_listing


@pytest.fixture()
def client(storefront):
    from storefront.application import create_app

    return TestClient(create_app(storefront, configure_logs=False))


@pytest.fixture()
def logged_in_client(client):
    response = client.post(
        "/accounts/register",
        json={
            "name": "Juan dela Cruz",
            "address": "123 Rizal Ave, Manila",
            "email": "juan@example.ph",
            "password": "pa55word",
            "barangay_clearance_uploaded": True,
            "government_id_uploaded": True,
        },
    )
    assert response.status_code == 201
    return client


@pytest.fixture()
def post_product(logged_in_client):
    """Helper: POST /products and return the created product JSON."""

    def _post_product(**overrides):
        body = {
            "name": "Native Coffee Beans",
            "description": "Barako, 500g",
            "price": "100.00",
            "stock": 5,
            "payment_methods": ["GCash", "Cash on Delivery"],
            "logistics_methods": ["Lalamove", "Meet-up"],
            "seller_name": "Ana Reyes",
            "seller_contact": "0917 123 4567",
            "seller_address": "Batangas City",
            "agreed_to_terms": True,
        }
        body.update(overrides)
        response = logged_in_client.post("/products", json=body)
        assert response.status_code == 201, response.json()
        return response.json()

    return _post_product
