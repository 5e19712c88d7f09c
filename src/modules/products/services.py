"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and checking the
owning category through the ``ICategoryRepository``.

Business rules enforced here:
- RN-PRO-001: Code must be unique among active products (case-insensitive).
- RN-PRO-002: The owning category must exist and be active.
- RN-PRO-003: Price must be greater than zero.
- RN-PRO-004: Stock cannot be negative.
- RN-PRO-005: Soft delete, optionally audited (user + reason).

Create and full update share one rule set, checked in this order:
name, code, price, stock, category selected, category exists, code
unique.  Partial updates only check what was supplied and do not
re-check code uniqueness (the partial contract has no code field).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

import structlog
from django.db import IntegrityError, transaction

from modules.core.exceptions import InvalidData, service_boundary
from modules.products.exceptions import (
    CategoryUnavailable,
    InvalidProduct,
    ProductAlreadyExists,
    ProductNotFound,
)

if TYPE_CHECKING:
    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.core.dtos import DeletionAuditDTO
    from modules.products.dtos import (
        CreateProductDTO,
        PartialUpdateProductDTO,
        UpdateProductDTO,
    )
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

INVALID_ID = "El ID del producto debe ser mayor que 0"
INVALID_CATEGORY_ID = "El ID de la categoría debe ser mayor que 0"
NAME_REQUIRED = "El nombre del producto es obligatorio"
NAME_BLANK = "El nombre del producto no puede estar vacío"
CODE_REQUIRED = "El código del producto es obligatorio"
PRICE_NOT_POSITIVE = "El precio del producto debe ser mayor que 0"
STOCK_NEGATIVE = "El stock del producto no puede ser negativo"
CATEGORY_REQUIRED = "Debe seleccionar una categoría válida"
AUDIT_USER_REQUIRED = "El usuario que realiza la eliminación es obligatorio"


def _not_found(id: int) -> ProductNotFound:
    return ProductNotFound(f"No se encontró el producto con ID {id}")


def _duplicate_code(code: str) -> ProductAlreadyExists:
    return ProductAlreadyExists(f"Ya existe un producto con el código '{code}'")


class ProductService:
    """Application service for Product use-cases.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _ensure_category(self, category_id: int) -> None:
        # Row lock: a concurrent category delete waits for this transaction.
        if self._category_repo.get_for_update(category_id) is None:
            raise CategoryUnavailable(f"No existe la categoría con ID {category_id}")

    def _validate_full(
        self,
        dto: Union[CreateProductDTO, UpdateProductDTO],
        exclude_id: Optional[int] = None,
    ) -> None:
        if not dto.name or not dto.name.strip():
            raise InvalidProduct(NAME_REQUIRED)
        if not dto.code or not dto.code.strip():
            raise InvalidProduct(CODE_REQUIRED)
        if dto.price <= 0:
            raise InvalidProduct(PRICE_NOT_POSITIVE)
        if dto.stock < 0:
            raise InvalidProduct(STOCK_NEGATIVE)
        if dto.category_id <= 0:
            raise InvalidProduct(CATEGORY_REQUIRED)

        self._ensure_category(dto.category_id)

        if self._repo.exists_by_code(dto.code, exclude_id):
            logger.warning("product.duplicate_code", code=dto.code)
            raise _duplicate_code(dto.code)

    def _validate_partial(self, dto: PartialUpdateProductDTO) -> Dict[str, Any]:
        """Check the supplied fields and return the model changes to apply."""
        changes: Dict[str, Any] = {}

        if dto.price is not None:
            if dto.price <= 0:
                raise InvalidProduct(PRICE_NOT_POSITIVE)
            changes["price"] = dto.price
        if dto.stock is not None:
            if dto.stock < 0:
                raise InvalidProduct(STOCK_NEGATIVE)
            changes["stock"] = dto.stock
        if dto.name:
            if not dto.name.strip():
                raise InvalidProduct(NAME_BLANK)
            changes["name"] = dto.name
        if dto.category_id is not None:
            self._ensure_category(dto.category_id)
            changes["category_id"] = dto.category_id
        if "description" in dto.model_fields_set:
            changes["description"] = dto.description
        if dto.is_active is not None:
            changes["is_active"] = dto.is_active

        return changes

    def _raise_if_code_taken(
        self, exc: IntegrityError, code: str, exclude_id: Optional[int] = None
    ) -> None:
        """Report a constraint failure as a duplicate only when the code is taken.

        Any other integrity failure (price or stock checks, foreign keys)
        is left for ``service_boundary`` to wrap.
        """
        if self._repo.exists_by_code(code, exclude_id):
            logger.warning("product.duplicate_code", code=code, guard="constraint")
            raise _duplicate_code(code) from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @service_boundary("Error al obtener los productos")
    def list_products(self) -> List[Product]:
        """Return active products ordered by name."""
        return self._repo.list_active()

    @service_boundary("Error al obtener los productos de la categoría {category_id}")
    def list_by_category(self, category_id: int) -> List[Product]:
        """Return the active products of a category.

        Raises:
            InvalidData: if ``category_id`` is not positive.
        """
        if category_id <= 0:
            raise InvalidData(INVALID_CATEGORY_ID)
        return self._repo.list_by_category(category_id)

    @service_boundary("Error al obtener el producto con ID {id}")
    def get_product(self, id: int) -> Product:
        """Retrieve a single active product.

        Raises:
            InvalidProduct: if ``id`` is not positive.
            ProductNotFound: if no active product matches.
        """
        if id <= 0:
            raise InvalidProduct(INVALID_ID)
        product = self._repo.get_by_id(id)
        if product is None:
            raise _not_found(id)
        return product

    @service_boundary("Error al buscar productos con el término '{term}'")
    def search_products(self, term: Optional[str]) -> List[Product]:
        """Search by name or code; a blank term lists every active product."""
        if not term or not term.strip():
            return self.list_products()
        return self._repo.search(term)

    @service_boundary("Error al verificar el código del producto")
    def exists_by_code(self, code: str, exclude_id: Optional[int] = None) -> bool:
        return self._repo.exists_by_code(code, exclude_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @service_boundary("Error al crear el producto")
    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product after the full rule set passes.

        Raises:
            InvalidProduct: name, code, price, stock or category id invalid.
            CategoryUnavailable: the category does not exist or is inactive.
            ProductAlreadyExists: the code is taken (RN-PRO-001).
        """
        self._validate_full(dto)

        try:
            with transaction.atomic():
                product = self._repo.create(dto)
        except IntegrityError as exc:
            self._raise_if_code_taken(exc, dto.code)
            raise

        logger.info("product.created", product_id=product.id, code=product.code)
        return product

    @service_boundary("Error al actualizar el producto con ID {id}")
    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Replace every editable field of a product.

        Raises:
            InvalidProduct: ``id`` not positive or a field rule fails.
            CategoryUnavailable: the category does not exist or is inactive.
            ProductAlreadyExists: another active product uses the code.
            ProductNotFound: no active product matches ``id``.
        """
        if id <= 0:
            raise InvalidProduct(INVALID_ID)

        self._validate_full(dto, exclude_id=id)

        log = logger.bind(product_id=id)
        try:
            with transaction.atomic():
                product = self._repo.update(id, dto)
        except IntegrityError as exc:
            self._raise_if_code_taken(exc, dto.code, exclude_id=id)
            raise

        if product is None:
            raise _not_found(id)

        log.info("product.updated")
        return product

    @service_boundary("Error al actualizar parcialmente el producto con ID {id}")
    @transaction.atomic
    def partial_update_product(
        self, id: int, dto: PartialUpdateProductDTO
    ) -> Product:
        """Validate and apply only the supplied fields.

        Raises:
            InvalidProduct: ``id`` not positive or a supplied field is invalid.
            CategoryUnavailable: a supplied category does not exist.
            ProductNotFound: no active product matches ``id``.
        """
        if id <= 0:
            raise InvalidProduct(INVALID_ID)

        changes = self._validate_partial(dto)

        product = self._repo.update_partial(id, changes)
        if product is None:
            raise _not_found(id)

        logger.info(
            "product.partially_updated", product_id=id, fields=sorted(changes)
        )
        return product

    @service_boundary("Error al eliminar el producto con ID {id}")
    @transaction.atomic
    def delete_product(
        self, id: int, audit: Optional[DeletionAuditDTO] = None
    ) -> bool:
        """Soft-delete a product, optionally recording who and why.

        Raises:
            InvalidProduct: ``id`` not positive, or an audit without user.
            ProductNotFound: no active product matches ``id``.
        """
        if id <= 0:
            raise InvalidProduct(INVALID_ID)
        if audit is not None and not (audit.deleted_by or "").strip():
            raise InvalidProduct(AUDIT_USER_REQUIRED)

        if not self._repo.delete(id, audit):
            raise _not_found(id)

        logger.info("product.soft_deleted", product_id=id, audited=audit is not None)
        return True
