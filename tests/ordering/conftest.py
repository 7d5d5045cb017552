import pytest
from ordering.cart.cart import CartAggregator
from ordering.cart.line_item import LineItem
from ordering.cart.store import MemoryCartStore
from ordering.checkout.session import Shopper, StaticSession
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


def _make_item(product_id="prod-A", variant_key="bottle", unit_price=500000, quantity=1, **overrides):
    defaults = {
        "product_id": product_id,
        "variant_key": variant_key,
        "variant_label": "Bottle 100ml",
        "unit_price": unit_price,
        "quantity": quantity,
        "stock_ceiling": 10,
        "image_ref": "https://img.example.com/a.jpg",
        "display_name": "Aqua Fresca",
    }
    defaults.update(overrides)
    return LineItem(**defaults)


@pytest.fixture()
def make_item():
    """Factory for line items with sensible defaults."""
    return _make_item


@pytest.fixture()
def cart_store():
    return MemoryCartStore()


@pytest.fixture()
def cart(cart_store):
    return CartAggregator(cart_store, key="testCart")


@pytest.fixture()
def shopper():
    return Shopper(uid="user-001", email="rina@example.com", display_name="Rina Wijaya")


@pytest.fixture()
def session(shopper):
    return StaticSession(shopper)


@pytest.fixture()
def shipping():
    return {
        "name": "Rina Wijaya",
        "phone": "081234567890",
        "address": "Jl. Melati No. 12",
        "city": "Bandung",
        "postal_code": "40115",
        "method": "jne",
    }
