"""Shared DTOs for the Service Layer.

- ``DeletionAuditDTO``: who deletes a record and why (audited soft delete).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DeletionAuditDTO(BaseModel):
    """Immutable audit metadata attached to a soft delete.

    ``deleted_by`` accepts an empty string or ``null`` so that a missing
    user is reported by the service as a business validation error rather
    than a schema error.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    deleted_by: Optional[str] = Field(
        default="", max_length=100, alias="usuarioEliminacion"
    )
    reason: Optional[str] = Field(
        default=None, max_length=500, alias="motivoEliminacion"
    )
