import os
from pathlib import Path

import pytest

# Must be set before animalshop modules read their configuration
os.environ.setdefault("PROTEAN_ENV", "test")
os.environ.setdefault("ANIMALSHOP_BCRYPT_ROUNDS", "4")

from protean.integrations.pytest import DomainFixture  # noqa: E402


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def shop_bed():
    from animalshop.domain import shop

    bed = DomainFixture(shop)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shop_bed):
    with shop_bed.domain_context():
        yield

        from animalshop.order.numbering import order_numbers
        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

        order_numbers.reset()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    from animalshop.catalogue import service as catalogue

    def _make(name="Dog Food Premium", price=49.99, stock=100, **overrides):
        fields = {"name": name, "price": price, "stock": stock}
        fields.update(overrides)
        return catalogue.add_product(**fields)

    return _make


@pytest.fixture()
def make_category():
    from animalshop.catalogue import service as catalogue

    def _make(name="Dog Food", **overrides):
        return catalogue.add_category(name=name, **overrides)

    return _make


@pytest.fixture()
def make_address():
    from animalshop.addresses import service as addresses

    def _make(user_id="user-001", **overrides):
        fields = {
            "label": "Home",
            "first_name": "Jane",
            "last_name": "Doe",
            "address1": "12 Kennel Lane",
            "city": "Springfield",
            "state": "IL",
            "postal_code": "62701",
            "country": "US",
        }
        fields.update(overrides)
        return addresses.add_address(user_id, **fields)

    return _make


@pytest.fixture()
def user_owner():
    from animalshop.cart.cart import CartOwner

    return CartOwner.user("user-001")


@pytest.fixture()
def guest_owner():
    from animalshop.cart.cart import CartOwner

    return CartOwner.guest("guest-001")
