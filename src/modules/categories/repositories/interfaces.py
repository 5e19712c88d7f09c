"""Category repository interface.

Extends ``IRepository[Category]`` with the look-ups required by
RN-CAT-001 (unique name), RN-CAT-002 (delete blocked by active products)
and by the product service's category checks.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Mapping, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
    from modules.categories.models import Category


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for the Category aggregate.

    Read methods annotate ``active_product_count`` on the returned
    categories, except ``update_partial`` and ``get_for_update``.
    """

    @abstractmethod
    def get_with_products(self, id: int) -> Optional[Category]:
        """Retrieve an active category with ``active_products`` prefetched."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Category]:
        """Retrieve an active category with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def create(self, dto: CreateCategoryDTO) -> Category:
        """Persist a new category."""

    @abstractmethod
    def update(self, id: int, dto: UpdateCategoryDTO) -> Optional[Category]:
        """Overwrite name, description and active flag of an active category."""

    @abstractmethod
    def update_partial(self, id: int, changes: Mapping[str, Any]) -> Optional[Category]:
        """Apply only the given model fields to an active category."""

    @abstractmethod
    def has_active_products(self, id: int) -> bool:
        """Whether the category owns at least one active product."""

    @abstractmethod
    def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Case-insensitive name match among active categories."""
