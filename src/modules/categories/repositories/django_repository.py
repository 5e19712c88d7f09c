"""Django ORM implementation of the Category repository.

Satisfies ``ICategoryRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or ``False``) instead of raising; the Service Layer decides how to
translate a missing entity into a business error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import structlog
from django.db import transaction
from django.db.models import Count, Prefetch, Q

from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
    from modules.core.dtos import DeletionAuditDTO

logger = structlog.get_logger(__name__)


def _with_product_count(queryset):
    return queryset.annotate(
        active_product_count=Count("products", filter=Q(products__is_active=True))
    )


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def list_active(self) -> List[Category]:
        return list(_with_product_count(Category.objects.alive()).order_by("name"))

    def get_by_id(self, id: int) -> Optional[Category]:
        return _with_product_count(Category.objects.alive()).filter(id=id).first()

    def get_with_products(self, id: int) -> Optional[Category]:
        active_products = Prefetch(
            "products",
            queryset=Product.objects.alive().order_by("name"),
            to_attr="active_products",
        )
        return (
            Category.objects.alive()
            .filter(id=id)
            .prefetch_related(active_products)
            .first()
        )

    def get_for_update(self, id: int) -> Optional[Category]:
        return Category.objects.alive().select_for_update().filter(id=id).first()

    @transaction.atomic
    def create(self, dto: CreateCategoryDTO) -> Category:
        category = Category(
            name=dto.name,
            description=dto.description,
            is_active=dto.is_active,
        )
        category.save()
        category.active_product_count = 0
        logger.info("category.saved", category_id=category.id)
        return category

    @transaction.atomic
    def update(self, id: int, dto: UpdateCategoryDTO) -> Optional[Category]:
        category = self.get_for_update(id)
        if category is None:
            return None

        category.name = dto.name
        category.description = dto.description
        category.is_active = dto.is_active
        category.touch()
        category.save()

        category.active_product_count = Product.objects.alive().filter(
            category_id=category.id
        ).count()
        logger.info("category.saved", category_id=category.id)
        return category

    @transaction.atomic
    def update_partial(self, id: int, changes: Mapping[str, Any]) -> Optional[Category]:
        category = self.get_for_update(id)
        if category is None:
            return None

        for field, value in changes.items():
            setattr(category, field, value)
        category.touch()
        category.save(update_fields=[*changes, "updated_at"])
        logger.info("category.saved", category_id=category.id, fields=sorted(changes))
        return category

    def has_active_products(self, id: int) -> bool:
        return Product.objects.alive().filter(category_id=id).exists()

    @transaction.atomic
    def delete(self, id: int, audit: Optional[DeletionAuditDTO] = None) -> bool:
        category = self.get_for_update(id)
        if category is None:
            return False
        category.delete(audit=audit)
        logger.info("category.soft_deleted", category_id=id, audited=audit is not None)
        return True

    def exists_by_name(self, name: str, exclude_id: Optional[int] = None) -> bool:
        queryset = Category.objects.alive().filter(name_key=name.casefold())
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()
