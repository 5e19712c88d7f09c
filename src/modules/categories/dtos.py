"""Category DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  Field
aliases carry the public JSON names (``nombre``, ``descripcion``,
``estado``); Python code uses the attribute names.  DTOs are immutable
(``frozen=True``).

- ``CreateCategoryDTO``: input for category creation.
- ``UpdateCategoryDTO``: input for full category replacement.
- ``PartialUpdateCategoryDTO``: input for partial updates; only fields
  present in ``model_fields_set`` are applied.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateCategoryDTO(BaseModel):
    """Immutable DTO for category creation requests.

    Only shape is checked here; a blank name is rejected by the service.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", max_length=100, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=500, alias="descripcion"
    )
    is_active: bool = Field(default=True, alias="estado")


class UpdateCategoryDTO(BaseModel):
    """Immutable DTO for full category updates (PUT)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", max_length=100, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=500, alias="descripcion"
    )
    is_active: bool = Field(default=True, alias="estado")


class PartialUpdateCategoryDTO(BaseModel):
    """Immutable DTO for partial category updates (PATCH).

    All fields are optional.  ``description`` may be explicitly sent as
    ``null`` to clear it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, max_length=100, alias="nombre")
    description: Optional[str] = Field(
        default=None, max_length=500, alias="descripcion"
    )
    is_active: Optional[bool] = Field(default=None, alias="estado")
