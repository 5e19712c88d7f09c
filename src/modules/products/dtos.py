"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``) and accept either the public JSON
names (``nombre``, ``codigo``, ``precio``, ``categoriaId`` ...) or the
Python attribute names.

Only types, maximum lengths and the price precision (the column is
``numeric(18, 2)``, so sub-cent amounts would be rounded away) are
checked here.  Required fields,
numeric ranges and cross-entity rules belong to ``ProductService`` so
that they are reported in a fixed order.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for full product updates.
- ``PartialUpdateProductDTO``: input for partial updates (no ``code``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", max_length=150, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=1000, alias="descripcion"
    )
    price: Decimal = Field(
        default=Decimal("0"), max_digits=18, decimal_places=2, alias="precio"
    )
    stock: int = Field(default=0, alias="stock")
    code: str = Field(default="", max_length=50, alias="codigo")
    is_active: bool = Field(default=True, alias="estado")
    category_id: int = Field(default=0, alias="categoriaId")


class UpdateProductDTO(BaseModel):
    """Immutable DTO for full product updates (PUT)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", max_length=150, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=1000, alias="descripcion"
    )
    price: Decimal = Field(
        default=Decimal("0"), max_digits=18, decimal_places=2, alias="precio"
    )
    stock: int = Field(default=0, alias="stock")
    code: str = Field(default="", max_length=50, alias="codigo")
    is_active: bool = Field(default=True, alias="estado")
    category_id: int = Field(default=0, alias="categoriaId")


class PartialUpdateProductDTO(BaseModel):
    """Immutable DTO for partial product updates (PATCH).

    All fields are optional; only supplied fields will be validated
    and applied.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=150, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=1000, alias="descripcion"
    )
    price: Optional[Decimal] = Field(
        default=None, max_digits=18, decimal_places=2, alias="precio"
    )
    stock: Optional[int] = Field(default=None, alias="stock")
    is_active: Optional[bool] = Field(default=None, alias="estado")
    category_id: Optional[int] = Field(default=None, alias="categoriaId")
