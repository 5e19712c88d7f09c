"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by
RN-PRO-001 (unique code), the category listing and the search endpoint.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    Returned products have their ``category`` loaded so the category name
    can be rendered without extra queries.
    """

    @abstractmethod
    def list_by_category(self, category_id: int) -> List[Product]:
        """List active products of a category ordered by name."""

    @abstractmethod
    def search(self, term: str) -> List[Product]:
        """Case-insensitive substring match on name or code, active only."""

    @abstractmethod
    def create(self, dto: CreateProductDTO) -> Product:
        """Persist a new product."""

    @abstractmethod
    def update(self, id: int, dto: UpdateProductDTO) -> Optional[Product]:
        """Overwrite every editable field of an active product."""

    @abstractmethod
    def update_partial(self, id: int, changes: Mapping[str, Any]) -> Optional[Product]:
        """Apply only the given model fields to an active product."""

    @abstractmethod
    def exists_by_code(self, code: str, exclude_id: Optional[int] = None) -> bool:
        """Case-insensitive code match among active products."""
