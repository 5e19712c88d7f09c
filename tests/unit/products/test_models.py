"""Unit tests for the Product model.

Covers:
- Storage guards: price > 0, stock >= 0, code unique among active rows.
- Category protection (PROTECT on hard delete).
- Soft delete lifecycle (inherited from SoftDeleteModel).
- __str__ representation.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestProductConstraints:
    def test_zero_price_rejected_by_storage(self, make_category):
        category = make_category()
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(
                name="Gratis", code="G-1", price=Decimal("0"), category=category
            )

    def test_negative_stock_rejected_by_storage(self, make_category):
        category = make_category()
        with pytest.raises(IntegrityError), transaction.atomic():
            Product.objects.create(
                name="Cable",
                code="C-1",
                price=Decimal("5.00"),
                stock=-1,
                category=category,
            )

    def test_code_unique_case_insensitive_among_active(self, make_product):
        make_product("C-1")
        with pytest.raises(IntegrityError), transaction.atomic():
            make_product("c-1")

    def test_accented_code_unique_case_insensitive(self, make_product):
        make_product("ÑU-1")
        with pytest.raises(IntegrityError), transaction.atomic():
            make_product("ñu-1")

    def test_save_keeps_casefolded_keys(self, make_product):
        product = make_product("CÑ-1", name="Cañón")
        assert (product.name_key, product.code_key) == ("cañón", "cñ-1")

        product.name = "MÁQUINA"
        product.save(update_fields=["name"])

        product.refresh_from_db()
        assert product.name_key == "máquina"

    def test_code_reusable_after_soft_delete(self, make_product):
        make_product("C-1").delete()
        assert make_product("C-1").is_active is True

    def test_category_cannot_be_hard_deleted_with_products(self, make_product):
        product = make_product()
        with pytest.raises(ProtectedError):
            product.category.hard_delete()


class TestProductLifecycle:
    def test_defaults(self, make_category):
        product = Product.objects.create(
            name="Cable", code="C-1", price=Decimal("5.00"), category=make_category()
        )
        assert product.stock == 0
        assert product.is_active is True
        assert product.description is None
        assert product.updated_at is None

    def test_soft_delete_keeps_row(self, make_product):
        product = make_product()
        product.delete()
        assert Product.objects.filter(pk=product.pk).exists()
        assert not Product.objects.alive().filter(pk=product.pk).exists()

    def test_str(self):
        assert str(Product(code="C-1", name="Cable")) == "C-1 - Cable"
