import os

os.environ.setdefault("ORDER_STORE", "memory")

import pytest

from app.database.sanity_store import InMemoryOrderStore, get_order_store, reset_order_store
from app.models.checkout import CartItem
from app.state.store import CartState


@pytest.fixture()
def store():
    return InMemoryOrderStore()


@pytest.fixture()
def app(store):
    from app.main import app

    app.dependency_overrides[get_order_store] = lambda: store
    yield app
    app.dependency_overrides.clear()
    reset_order_store()


@pytest.fixture()
def widget():
    return CartItem(id="p1", title="Widget", quantity=2, price=10)


@pytest.fixture()
def cart(widget):
    return CartState([widget])


@pytest.fixture()
def billing():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+1-555-000-1111",
        "company": "",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip": "62701",
        "country": "US",
        "orderNotes": "",
        "paymentMethod": "cash-on-delivery",
    }
