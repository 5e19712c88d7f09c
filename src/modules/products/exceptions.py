"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer translates them into HTTP responses through the shared
exception handler.
"""

from __future__ import annotations

from modules.core.exceptions import EntityConflict, EntityNotFound, InvalidData


class InvalidProduct(InvalidData):
    """Product input breaks a validation rule (RN-PRO-003, RN-PRO-004, ...)."""


class CategoryUnavailable(InvalidData):
    """The referenced category does not exist or is inactive (RN-PRO-002)."""


class ProductNotFound(EntityNotFound):
    """The requested product does not exist or has been soft-deleted."""


class ProductAlreadyExists(EntityConflict):
    """Another active product already uses the same code (RN-PRO-001)."""
