"""Category service layer (Use Cases).

Orchestrates business logic for the Category aggregate, delegating
persistence to the injected ``ICategoryRepository``.

Business rules enforced here:
- RN-CAT-001: Name must be unique among active categories (case-insensitive).
- RN-CAT-002: A category with active products cannot be deleted.
- RN-CAT-003: Soft delete, optionally audited (user + reason).

Every public method runs behind ``service_boundary``: business errors
propagate unchanged, anything else becomes ``InternalServiceError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import IntegrityError, transaction

from modules.categories.exceptions import (
    CategoryAlreadyExists,
    CategoryInUse,
    CategoryNotFound,
    InvalidCategory,
)
from modules.core.exceptions import service_boundary

if TYPE_CHECKING:
    from modules.categories.dtos import (
        CreateCategoryDTO,
        PartialUpdateCategoryDTO,
        UpdateCategoryDTO,
    )
    from modules.categories.models import Category
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.core.dtos import DeletionAuditDTO

logger = structlog.get_logger(__name__)

INVALID_ID = "El ID de la categoría debe ser mayor que 0"
NAME_REQUIRED = "El nombre de la categoría es obligatorio"
DELETE_BLOCKED = (
    "No se puede eliminar la categoría. "
    "Puede que no exista o tenga productos asociados"
)
AUDIT_USER_REQUIRED = "El usuario que realiza la eliminación es obligatorio"


def _not_found(id: int) -> CategoryNotFound:
    return CategoryNotFound(f"No se encontró la categoría con ID {id}")


class CategoryService:
    """Application service for Category use-cases.

    Receives an ``ICategoryRepository`` via constructor injection (DIP).
    Holds no state besides the repository handle, so a single instance is
    shared by all requests.
    """

    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @service_boundary("Error al obtener las categorías")
    def list_categories(self) -> List[Category]:
        """Return active categories ordered by name, with product counts."""
        return self._repo.list_active()

    @service_boundary("Error al obtener la categoría con ID {id}")
    def get_category(self, id: int) -> Category:
        """Retrieve a single active category.

        Raises:
            CategoryNotFound: if ``id`` is not positive or no active
                category matches.
        """
        if id <= 0:
            raise CategoryNotFound(INVALID_ID)
        category = self._repo.get_by_id(id)
        if category is None:
            raise _not_found(id)
        return category

    @service_boundary("Error al obtener la categoría con productos para ID {id}")
    def get_category_with_products(self, id: int) -> Category:
        """Retrieve an active category with its active products.

        Raises:
            CategoryNotFound: same conditions as ``get_category``.
        """
        if id <= 0:
            raise CategoryNotFound(INVALID_ID)
        category = self._repo.get_with_products(id)
        if category is None:
            raise _not_found(id)
        return category

    @service_boundary("Error al verificar el nombre de la categoría")
    def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        return self._repo.exists_by_name(name, exclude_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @service_boundary("Error al crear la categoría")
    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Create a new category after enforcing uniqueness rules.

        Raises:
            InvalidCategory: if the name is blank.
            CategoryAlreadyExists: if the name is taken (RN-CAT-001).
        """
        if not dto.name or not dto.name.strip():
            raise InvalidCategory(NAME_REQUIRED)

        log = logger.bind(name=dto.name)

        if self._repo.exists_by_name(dto.name):
            log.warning("category.duplicate_name")
            raise CategoryAlreadyExists(
                f"Ya existe una categoría con el nombre '{dto.name}'"
            )

        try:
            with transaction.atomic():
                category = self._repo.create(dto)
        except IntegrityError as exc:
            if not self._repo.exists_by_name(dto.name):
                raise
            log.warning("category.duplicate_name", guard="constraint")
            raise CategoryAlreadyExists(
                f"Ya existe una categoría con el nombre '{dto.name}'"
            ) from exc

        log.info("category.created", category_id=category.id)
        return category

    @service_boundary("Error al actualizar la categoría con ID {id}")
    @transaction.atomic
    def update_category(self, id: int, dto: UpdateCategoryDTO) -> Category:
        """Replace name, description and active flag of a category.

        Raises:
            InvalidCategory: if ``id`` is not positive or the name is blank.
            CategoryAlreadyExists: if another active category uses the name.
            CategoryNotFound: if no active category matches ``id``.
        """
        if id <= 0:
            raise InvalidCategory(INVALID_ID)
        if not dto.name or not dto.name.strip():
            raise InvalidCategory(NAME_REQUIRED)

        log = logger.bind(category_id=id)

        if self._repo.exists_by_name(dto.name, id):
            log.warning("category.duplicate_name", name=dto.name)
            raise CategoryAlreadyExists(
                f"Ya existe otra categoría con el nombre '{dto.name}'"
            )

        try:
            with transaction.atomic():
                category = self._repo.update(id, dto)
        except IntegrityError as exc:
            if not self._repo.exists_by_name(dto.name, id):
                raise
            log.warning("category.duplicate_name", name=dto.name, guard="constraint")
            raise CategoryAlreadyExists(
                f"Ya existe otra categoría con el nombre '{dto.name}'"
            ) from exc

        if category is None:
            raise _not_found(id)

        log.info("category.updated")
        return category

    @service_boundary("Error al actualizar parcialmente la categoría con ID {id}")
    @transaction.atomic
    def partial_update_category(
        self, id: int, dto: PartialUpdateCategoryDTO
    ) -> Category:
        """Apply only the supplied fields.

        The returned category carries no ``active_product_count``.

        Raises:
            InvalidCategory: if a supplied name is whitespace only.
            CategoryAlreadyExists: if the new name collides at storage level.
            CategoryNotFound: if no active category matches ``id``.
        """
        supplied = dto.model_fields_set
        changes: Dict[str, Any] = {}

        if dto.name:
            if not dto.name.strip():
                raise InvalidCategory(NAME_REQUIRED)
            changes["name"] = dto.name
        if "description" in supplied:
            changes["description"] = dto.description
        if dto.is_active is not None:
            changes["is_active"] = dto.is_active

        log = logger.bind(category_id=id)

        try:
            with transaction.atomic():
                category = self._repo.update_partial(id, changes)
        except IntegrityError as exc:
            # Only a renamed category can collide on the unique name.
            if "name" not in changes or not self._repo.exists_by_name(dto.name, id):
                raise
            log.warning("category.duplicate_name", name=dto.name, guard="constraint")
            raise CategoryAlreadyExists(
                f"Ya existe otra categoría con el nombre '{dto.name}'"
            ) from exc

        if category is None:
            raise _not_found(id)

        log.info("category.partially_updated", fields=sorted(changes))
        return category

    @service_boundary("Error al eliminar la categoría con ID {id}")
    @transaction.atomic
    def delete_category(
        self, id: int, audit: Optional[DeletionAuditDTO] = None
    ) -> bool:
        """Soft-delete a category, optionally recording who and why.

        Raises:
            InvalidCategory: if ``id`` is not positive, or an audit is given
                without a deleting user.
            CategoryInUse: if the category does not exist or still has
                active products (RN-CAT-002).
        """
        if id <= 0:
            raise InvalidCategory(INVALID_ID)
        if audit is not None and not (audit.deleted_by or "").strip():
            raise InvalidCategory(AUDIT_USER_REQUIRED)

        log = logger.bind(category_id=id)

        if self._repo.get_for_update(id) is None:
            log.warning("category.delete_blocked", reason="not_found")
            raise CategoryInUse(DELETE_BLOCKED)
        if self._repo.has_active_products(id):
            log.warning("category.delete_blocked", reason="active_products")
            raise CategoryInUse(DELETE_BLOCKED)

        deleted = self._repo.delete(id, audit)
        if not deleted:
            raise CategoryInUse(DELETE_BLOCKED)

        log.info("category.soft_deleted", audited=audit is not None)
        return deleted
