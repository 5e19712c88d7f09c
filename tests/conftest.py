from decimal import Decimal

import pytest

from rest_framework.test import APIClient

from modules.categories.models import Category
from modules.products.models import Product


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_category():
    """Factory persisting a category straight through the ORM."""

    def _make(name: str = "Electronics", **overrides) -> Category:
        return Category.objects.create(name=name, **overrides)

    return _make


@pytest.fixture()
def make_product(make_category):
    """Factory persisting a product; creates its category when none is given."""

    def _make(code: str = "C-1", category: Category | None = None, **overrides) -> Product:
        defaults = {
            "name": "Cable",
            "price": Decimal("5.00"),
            "stock": 10,
        }
        defaults.update(overrides)
        if category is None:
            category = Category.objects.filter(name="Electronics").first() or make_category()
        return Product.objects.create(code=code, category=category, **defaults)

    return _make
