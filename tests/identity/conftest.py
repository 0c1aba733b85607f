import pytest


@pytest.fixture()
def registry():
    from identity.account.accounts import AccountRegistry

    return AccountRegistry()


@pytest.fixture()
def register(registry):
    def _register(**overrides):
        defaults = {
            "name": "Maria Santos",
            "address": "12 Mabini St, Quezon City",
            "email": "maria@example.ph",
            "password": "s3cret",
        }
        defaults.update(overrides)
        return registry.register(**defaults)

    return _register
