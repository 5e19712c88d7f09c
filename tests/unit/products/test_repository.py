"""Tests for ProductDjangoRepository against the test database."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.dtos import DeletionAuditDTO
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestReads:
    def test_list_active_orders_by_name(self, repo, make_product):
        make_product("B-1", name="Bobina")
        make_product("A-1", name="Adaptador")
        make_product("X-1", name="Borrado", is_active=False)

        assert [p.code for p in repo.list_active()] == ["A-1", "B-1"]

    def test_list_by_category(self, repo, make_category, make_product):
        electronics = make_category("Electronics")
        furniture = make_category("Furniture")
        make_product("E-1", category=electronics)
        make_product("F-1", category=furniture)

        assert [p.code for p in repo.list_by_category(furniture.id)] == ["F-1"]

    def test_search_matches_name_and_code(self, repo, make_product):
        make_product("W-100", name="Widget")
        make_product("Z-1", name="Otro")

        assert [p.code for p in repo.search("widget")] == ["W-100"]
        assert [p.code for p in repo.search("w-1")] == ["W-100"]

    def test_search_folds_accented_letters(self, repo, make_product):
        make_product("CÑ-1", name="Cañón")
        assert [p.code for p in repo.search("CAÑÓN")] == ["CÑ-1"]
        assert [p.code for p in repo.search("cñ")] == ["CÑ-1"]

    def test_search_skips_inactive(self, repo, make_product):
        make_product("W-100", name="Widget", is_active=False)
        assert repo.search("widget") == []

    def test_get_by_id_carries_category_name(self, repo, make_product):
        product = make_product()
        loaded = repo.get_by_id(product.id)
        assert loaded.category.name == "Electronics"

    def test_get_by_id_ignores_inactive(self, repo, make_product):
        product = make_product(is_active=False)
        assert repo.get_by_id(product.id) is None

    def test_exists_by_code(self, repo, make_product):
        product = make_product("C-1")
        assert repo.exists_by_code("c-1") is True
        assert repo.exists_by_code("C-1", exclude_id=product.id) is False
        assert repo.exists_by_code("C-2") is False

    def test_exists_by_code_folds_accented_letters(self, repo, make_product):
        make_product("ÑU-1")
        assert repo.exists_by_code("ñu-1") is True


class TestWrites:
    def test_create(self, repo, make_category):
        category = make_category()
        product = repo.create(
            CreateProductDTO(
                nombre="Cable",
                codigo="C-1",
                precio=Decimal("5.00"),
                stock=10,
                categoriaId=category.id,
            )
        )
        assert product.id is not None
        assert product.category.name == "Electronics"
        assert product.updated_at is None

    def test_update_can_deactivate(self, repo, make_product):
        product = make_product()
        updated = repo.update(
            product.id,
            UpdateProductDTO(
                nombre="Cable",
                codigo="C-1",
                precio=Decimal("6.00"),
                stock=1,
                estado=False,
                categoriaId=product.category_id,
            ),
        )
        assert updated.is_active is False
        assert updated.price == Decimal("6.00")
        assert updated.updated_at is not None

    def test_update_missing_returns_none(self, repo, make_category):
        dto = UpdateProductDTO(
            nombre="X", codigo="X", precio=Decimal("1"), categoriaId=make_category().id
        )
        assert repo.update(999, dto) is None

    def test_update_partial_moves_category(self, repo, make_category, make_product):
        product = make_product()
        furniture = make_category("Furniture")

        updated = repo.update_partial(product.id, {"category_id": furniture.id})

        assert updated.category.name == "Furniture"
        assert updated.name == "Cable"

    def test_delete_bare(self, repo, make_product):
        product = make_product()
        assert repo.delete(product.id) is True
        product.refresh_from_db()
        assert product.is_active is False
        assert product.deletion is None

    def test_delete_audited(self, repo, make_product):
        product = make_product()
        repo.delete(product.id, DeletionAuditDTO(usuarioEliminacion="ana", motivoEliminacion="roto"))
        product.refresh_from_db()
        assert product.deletion.deleted_by == "ana"
        assert product.deletion.reason == "roto"

    def test_delete_missing_returns_false(self, repo):
        assert repo.delete(999) is False
