import pytest


@pytest.fixture()
def ledger():
    from inventory.ledger.ledger import InventoryLedger

    return InventoryLedger()

