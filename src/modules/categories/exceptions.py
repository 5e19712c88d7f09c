"""Category domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer translates them into HTTP responses through the shared
exception handler.
"""

from __future__ import annotations

from modules.core.exceptions import EntityConflict, EntityNotFound, InvalidData


class InvalidCategory(InvalidData):
    """Category input breaks a validation rule (id bounds, blank name)."""


class CategoryNotFound(EntityNotFound):
    """The requested category does not exist or has been soft-deleted."""


class CategoryAlreadyExists(EntityConflict):
    """Another active category already uses the same name (RN-CAT-001)."""


class CategoryInUse(EntityConflict):
    """The category cannot be deleted: missing or has active products (RN-CAT-002)."""
