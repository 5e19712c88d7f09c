"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or ``False``) instead of raising; the Service Layer decides how to
translate a missing entity into a business error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import structlog
from django.db import transaction
from django.db.models import Q

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

if TYPE_CHECKING:
    from modules.core.dtos import DeletionAuditDTO
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _active(self):
        return Product.objects.alive().select_related("category")

    def _reload(self, id: int) -> Product:
        # Unfiltered: a full update may have just deactivated the product.
        return Product.objects.select_related("category").get(id=id)

    def list_active(self) -> List[Product]:
        return list(self._active().order_by("name"))

    def list_by_category(self, category_id: int) -> List[Product]:
        return list(self._active().filter(category_id=category_id).order_by("name"))

    def search(self, term: str) -> List[Product]:
        """Match ``term`` inside name or code.

        Examples::

            search("widget")  # matches "Widget Pro"
            search("w-1")     # matches code "W-100"
            search("CAÑÓN")   # matches "Cañón 12mm"
        """
        key = term.casefold()
        queryset = self._active().filter(
            Q(name_key__contains=key) | Q(code_key__contains=key)
        )
        return list(queryset.order_by("name"))

    def get_by_id(self, id: int) -> Optional[Product]:
        return self._active().filter(id=id).first()

    @transaction.atomic
    def create(self, dto: CreateProductDTO) -> Product:
        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
            code=dto.code,
            is_active=dto.is_active,
            category_id=dto.category_id,
        )
        product.save()
        logger.info("product.saved", product_id=product.id, code=product.code)
        return self._reload(product.id)

    @transaction.atomic
    def update(self, id: int, dto: UpdateProductDTO) -> Optional[Product]:
        product = Product.objects.alive().select_for_update().filter(id=id).first()
        if product is None:
            return None

        product.name = dto.name
        product.description = dto.description
        product.price = dto.price
        product.stock = dto.stock
        product.code = dto.code
        product.is_active = dto.is_active
        product.category_id = dto.category_id
        product.touch()
        product.save()

        logger.info("product.saved", product_id=id, code=product.code)
        return self._reload(id)

    @transaction.atomic
    def update_partial(self, id: int, changes: Mapping[str, Any]) -> Optional[Product]:
        product = Product.objects.alive().select_for_update().filter(id=id).first()
        if product is None:
            return None

        for field, value in changes.items():
            setattr(product, field, value)
        product.touch()
        product.save(update_fields=[*changes, "updated_at"])

        logger.info("product.saved", product_id=id, fields=sorted(changes))
        return self._reload(id)

    @transaction.atomic
    def delete(self, id: int, audit: Optional[DeletionAuditDTO] = None) -> bool:
        product = Product.objects.alive().select_for_update().filter(id=id).first()
        if product is None:
            return False
        product.delete(audit=audit)
        logger.info("product.soft_deleted", product_id=id, audited=audit is not None)
        return True

    def exists_by_code(self, code: str, exclude_id: Optional[int] = None) -> bool:
        queryset = Product.objects.alive().filter(code_key=code.casefold())
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()
