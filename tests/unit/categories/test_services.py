"""Unit tests for CategoryService.

Covers:
- get_category / get_category_with_products: happy path, id bounds, not found.
- create_category: blank name, duplicate name (RN-CAT-001), storage guard.
- update_category: id bounds, duplicate against others, not found.
- partial_update_category: only supplied fields reach the repository.
- delete_category: active products block (RN-CAT-002), audited variant.
- service boundary: unexpected repository failures become internal errors.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError

from modules.categories.dtos import (
    CreateCategoryDTO,
    PartialUpdateCategoryDTO,
    UpdateCategoryDTO,
)
from modules.categories.exceptions import (
    CategoryAlreadyExists,
    CategoryInUse,
    CategoryNotFound,
    InvalidCategory,
)
from modules.categories.models import Category
from modules.categories.services import CategoryService
from modules.core.dtos import DeletionAuditDTO
from modules.core.exceptions import InternalServiceError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return CategoryService(repository=mock_repo)


def _category(id: int = 1, name: str = "Electronics") -> Category:
    return Category(id=id, name=name)


# ===========================================================================
# Queries
# ===========================================================================


class TestGetCategory:
    def test_success(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _category(id=4)
        assert service.get_category(4).id == 4
        mock_repo.get_by_id.assert_called_once_with(4)

    @pytest.mark.parametrize("bad_id", [0, -1])
    def test_non_positive_id_is_not_found(self, service, mock_repo, bad_id):
        with pytest.raises(CategoryNotFound, match="mayor que 0"):
            service.get_category(bad_id)
        mock_repo.get_by_id.assert_not_called()

    def test_missing_raises_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(CategoryNotFound, match="No se encontró la categoría con ID 8"):
            service.get_category(8)

    def test_with_products_missing_raises_not_found(self, service, mock_repo):
        mock_repo.get_with_products.return_value = None
        with pytest.raises(CategoryNotFound):
            service.get_category_with_products(8)

    def test_list_delegates_to_repository(self, service, mock_repo):
        mock_repo.list_active.return_value = [_category()]
        assert len(service.list_categories()) == 1


# ===========================================================================
# create_category
# ===========================================================================


class TestCreateCategory:
    def test_success(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.create.side_effect = lambda dto: _category(id=1, name=dto.name)

        category = service.create_category(CreateCategoryDTO(nombre="Electronics"))

        assert category.name == "Electronics"
        mock_repo.exists_by_name.assert_called_once_with("Electronics")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_raises(self, service, mock_repo, name):
        with pytest.raises(InvalidCategory, match="obligatorio"):
            service.create_category(CreateCategoryDTO(nombre=name))
        mock_repo.create.assert_not_called()

    def test_duplicate_name_raises_conflict(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True
        with pytest.raises(
            CategoryAlreadyExists,
            match="Ya existe una categoría con el nombre 'electronics'",
        ):
            service.create_category(CreateCategoryDTO(nombre="electronics"))
        mock_repo.create.assert_not_called()

    def test_storage_constraint_maps_to_conflict(self, service, mock_repo):
        # Free at check time, taken by a concurrent insert at write time.
        mock_repo.exists_by_name.side_effect = [False, True]
        mock_repo.create.side_effect = IntegrityError("unique")
        with pytest.raises(CategoryAlreadyExists):
            service.create_category(CreateCategoryDTO(nombre="Electronics"))

    def test_other_integrity_failure_is_internal(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.create.side_effect = IntegrityError("NOT NULL constraint failed")
        with pytest.raises(InternalServiceError, match="Error al crear la categoría") as info:
            service.create_category(CreateCategoryDTO(nombre="Electronics"))
        assert isinstance(info.value.cause, IntegrityError)


# ===========================================================================
# update_category
# ===========================================================================


class TestUpdateCategory:
    def test_success(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.update.return_value = _category(id=2, name="Cables")

        category = service.update_category(2, UpdateCategoryDTO(nombre="Cables"))

        assert category.name == "Cables"
        mock_repo.exists_by_name.assert_called_once_with("Cables", 2)

    def test_non_positive_id_raises_validation(self, service, mock_repo):
        with pytest.raises(InvalidCategory):
            service.update_category(0, UpdateCategoryDTO(nombre="Cables"))

    def test_blank_name_raises(self, service):
        with pytest.raises(InvalidCategory):
            service.update_category(2, UpdateCategoryDTO(nombre=" "))

    def test_name_of_another_category_raises_conflict(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True
        with pytest.raises(CategoryAlreadyExists, match="Ya existe otra categoría"):
            service.update_category(2, UpdateCategoryDTO(nombre="Cables"))
        mock_repo.update.assert_not_called()

    def test_missing_raises_not_found(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.update.return_value = None
        with pytest.raises(CategoryNotFound):
            service.update_category(2, UpdateCategoryDTO(nombre="Cables"))


# ===========================================================================
# partial_update_category
# ===========================================================================


class TestPartialUpdateCategory:
    def test_only_active_flag_supplied(self, service, mock_repo):
        mock_repo.update_partial.return_value = _category()

        service.partial_update_category(1, PartialUpdateCategoryDTO(estado=False))

        mock_repo.update_partial.assert_called_once_with(1, {"is_active": False})

    def test_explicit_null_description_clears_it(self, service, mock_repo):
        mock_repo.update_partial.return_value = _category()

        service.partial_update_category(
            1, PartialUpdateCategoryDTO.model_validate({"descripcion": None})
        )

        mock_repo.update_partial.assert_called_once_with(1, {"description": None})

    def test_empty_name_is_ignored(self, service, mock_repo):
        mock_repo.update_partial.return_value = _category()

        service.partial_update_category(1, PartialUpdateCategoryDTO(nombre=""))

        mock_repo.update_partial.assert_called_once_with(1, {})

    def test_whitespace_name_raises(self, service, mock_repo):
        with pytest.raises(InvalidCategory):
            service.partial_update_category(1, PartialUpdateCategoryDTO(nombre="  "))
        mock_repo.update_partial.assert_not_called()

    def test_missing_raises_not_found(self, service, mock_repo):
        mock_repo.update_partial.return_value = None
        with pytest.raises(CategoryNotFound):
            service.partial_update_category(1, PartialUpdateCategoryDTO(nombre="X"))

    def test_storage_constraint_maps_to_conflict(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True
        mock_repo.update_partial.side_effect = IntegrityError("unique")
        with pytest.raises(CategoryAlreadyExists):
            service.partial_update_category(1, PartialUpdateCategoryDTO(nombre="X"))
        mock_repo.exists_by_name.assert_called_once_with("X", 1)

    def test_integrity_failure_without_rename_is_internal(self, service, mock_repo):
        mock_repo.update_partial.side_effect = IntegrityError("CHECK constraint failed")
        with pytest.raises(InternalServiceError):
            service.partial_update_category(1, PartialUpdateCategoryDTO(estado=False))
        mock_repo.exists_by_name.assert_not_called()


# ===========================================================================
# delete_category
# ===========================================================================


class TestDeleteCategory:
    def test_success(self, service, mock_repo):
        mock_repo.get_for_update.return_value = _category()
        mock_repo.has_active_products.return_value = False
        mock_repo.delete.return_value = True

        assert service.delete_category(1) is True
        mock_repo.delete.assert_called_once_with(1, None)

    def test_non_positive_id_raises_validation(self, service, mock_repo):
        with pytest.raises(InvalidCategory):
            service.delete_category(-3)
        mock_repo.delete.assert_not_called()

    def test_active_products_block_deletion(self, service, mock_repo):
        mock_repo.get_for_update.return_value = _category()
        mock_repo.has_active_products.return_value = True

        with pytest.raises(CategoryInUse, match="No se puede eliminar la categoría"):
            service.delete_category(1)
        mock_repo.delete.assert_not_called()

    def test_missing_category_reports_deletion_failed(self, service, mock_repo):
        mock_repo.get_for_update.return_value = None
        with pytest.raises(CategoryInUse):
            service.delete_category(1)

    def test_audited_delete_passes_audit(self, service, mock_repo):
        mock_repo.get_for_update.return_value = _category()
        mock_repo.has_active_products.return_value = False
        mock_repo.delete.return_value = True
        audit = DeletionAuditDTO(usuarioEliminacion="ana", motivoEliminacion="duplicada")

        service.delete_category(1, audit)

        mock_repo.delete.assert_called_once_with(1, audit)

    @pytest.mark.parametrize("user", ["", "   ", None])
    def test_audited_delete_requires_user(self, service, mock_repo, user):
        with pytest.raises(InvalidCategory, match="usuario"):
            service.delete_category(1, DeletionAuditDTO(usuarioEliminacion=user))
        mock_repo.get_for_update.assert_not_called()


# ===========================================================================
# Service boundary
# ===========================================================================


class TestServiceBoundary:
    def test_repository_failure_is_wrapped(self, service, mock_repo):
        mock_repo.list_active.side_effect = RuntimeError("connection lost")

        with pytest.raises(InternalServiceError) as exc_info:
            service.list_categories()

        assert exc_info.value.message == "Error al obtener las categorías"
        assert exc_info.value.detail == "connection lost"

    def test_message_includes_call_arguments(self, service, mock_repo):
        mock_repo.get_by_id.side_effect = RuntimeError("timeout")

        with pytest.raises(InternalServiceError, match="con ID 5"):
            service.get_category(5)
