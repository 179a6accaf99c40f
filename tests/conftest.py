"""Wspolne fixture'y testow."""

import os

import pytest
from fastapi.testclient import TestClient

# zaden test nie powinien dotknac prawdziwego .cart.json ani redisa
os.environ.setdefault("CART_STORAGE", "memory")

from app.product_service.main import create_product_app  # noqa: E402
from app.services.cart_storage import MemoryCartStorage  # noqa: E402
from app.services.cart_store import CartStore  # noqa: E402
from app.services.product_client import ProductClient  # noqa: E402

UPSTREAM_URL = "http://testserver"


def make_product(product_id, category="Books", price=10.0, title=None):
    return {
        "id": product_id,
        "title": title or f"Product {product_id}",
        "description": f"Description of {product_id}",
        "price": price,
        "images": [f"/images/{product_id}.jpg"],
        "category": category,
        "specifications": {"Weight": 1},
        "reviews": [
            {"id": product_id * 100, "userName": "anna", "rating": 4, "comment": "ok", "date": "2024-01-01"},
        ],
    }


@pytest.fixture
def storage():
    return MemoryCartStorage()


@pytest.fixture
def store(storage):
    return CartStore.load(storage)


@pytest.fixture
def catalog():
    books = [make_product(i, "Books", price=5.0 + i) for i in range(1, 16)]
    other = [make_product(i, "Electronics", price=100.0 + i) for i in range(16, 21)]
    return books + other


@pytest.fixture
def upstream(catalog):
    """Dev mock zrodla produktow jako sesja HTTP."""
    return TestClient(create_product_app(catalog))


@pytest.fixture
def product_client(upstream):
    return ProductClient(base_url=UPSTREAM_URL, session=upstream)
