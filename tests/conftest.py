import itertools

import pytest
from fastapi.testclient import TestClient

from shopfront.config import Settings
from shopfront.main import create_app
from shopfront.schemas.cart import CartItem
from shopfront.services.store import MemoryStore


def sequential_codes(prefix="DISC-T"):
    """Deterministic code factory: DISC-T00001, DISC-T00002, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter):05d}"


def make_item(sku="SKU1", name="Widget", price=10.0, quantity=1):
    return CartItem(sku=sku, name=name, price=price, quantity=quantity)


def place_orders(store, count, price=10.0, prefix="buyer"):
    """Check out `count` single-item carts, one per user."""
    orders = []
    for i in range(count):
        user = f"{prefix}-{i}"
        store.add_item(user, make_item(sku=f"SKU-{i}", price=price))
        orders.append(store.checkout(user))
    return orders


@pytest.fixture()
def store():
    return MemoryStore(3, code_factory=sequential_codes())


@pytest.fixture()
def test_settings(tmp_path):
    return Settings(nth_order_discount=3, static_dir=str(tmp_path / "no-static"))


@pytest.fixture()
def client(store, test_settings):
    app = create_app(store=store, cfg=test_settings)
    return TestClient(app)
