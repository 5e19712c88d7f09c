"""Base abstract models shared by the inventory apps.

Provides:
- ``BaseModel``: integer PK + ``created_at`` / ``updated_at`` bookkeeping.
- ``SoftDeleteModel``: Extends BaseModel with an ``is_active`` flag and an
  optional deletion audit (``deleted_at`` / ``deleted_by`` /
  ``deletion_reason``).

Design decisions:
- ``updated_at`` is nullable and only stamped on mutation (``touch()``);
  a freshly created record has never been modified.
- ``objects`` manager returns ALL records (unfiltered).  Use ``.alive()``
  explicitly to restrict to active rows.
- The three audit columns are written together by ``delete(audit=...)``
  in a single save, so a record is either Active, Deleted without audit,
  or Deleted with a complete audit.  ``deletion`` exposes that state as
  one optional value.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from django.db import models
from django.utils import timezone

if TYPE_CHECKING:
    from modules.core.dtos import DeletionAuditDTO

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with auto integer PK and timestamp bookkeeping."""

    id = models.BigAutoField(primary_key=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    class Meta:
        abstract = True

    def touch(self) -> None:
        """Stamp the modification timestamp (not persisted until save)."""
        self.updated_at = timezone.now()


# ---------------------------------------------------------------------------
# Soft Delete infrastructure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeletionRecord:
    """Audit trail of an audited soft delete."""

    deleted_at: datetime
    deleted_by: str
    reason: Optional[str]


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet with soft-delete helpers."""

    def alive(self) -> SoftDeleteQuerySet:
        """Return only active records."""
        return self.filter(is_active=True)

    def dead(self) -> SoftDeleteQuerySet:
        """Return only soft-deleted (inactive) records."""
        return self.filter(is_active=False)

    def delete(self) -> tuple[int, dict[str, int]]:
        """Bulk soft-delete: clears ``is_active`` + stamps ``updated_at``."""
        count = self.alive().update(is_active=False, updated_at=timezone.now())
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        """Permanently remove all records in the queryset."""
        return super().delete()


class SoftDeleteManager(models.Manager):
    """Manager that exposes ``.alive()`` / ``.dead()`` on the queryset."""

    def get_queryset(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db)

    def alive(self) -> SoftDeleteQuerySet:
        return self.get_queryset().alive()

    def dead(self) -> SoftDeleteQuerySet:
        return self.get_queryset().dead()


class SoftDeleteModel(BaseModel):
    """Abstract model with soft-delete via the ``is_active`` flag.

    - ``objects`` is **unfiltered** (returns all rows).
    - Use ``Model.objects.alive()`` to exclude soft-deleted rows.
    - ``delete()`` performs a soft-delete; ``hard_delete()`` removes physically.
    """

    is_active = models.BooleanField(default=True, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True, default=None)
    deleted_by = models.CharField(  # noqa: DJ01
        max_length=100, null=True, blank=True, default=None
    )
    deletion_reason = models.CharField(  # noqa: DJ01
        max_length=500, null=True, blank=True, default=None
    )

    objects = SoftDeleteManager()

    class Meta:
        abstract = True

    @property
    def is_deleted(self) -> bool:
        """Computed: ``True`` when the record is no longer active."""
        return not self.is_active

    @property
    def deletion(self) -> Optional[DeletionRecord]:
        """Audit of the delete, or ``None`` for active / unaudited rows."""
        if self.deleted_at is None or self.deleted_by is None:
            return None
        return DeletionRecord(
            deleted_at=self.deleted_at,
            deleted_by=self.deleted_by,
            reason=self.deletion_reason,
        )

    def delete(
        self,
        using=None,
        keep_parents=False,
        audit: Optional[DeletionAuditDTO] = None,
    ) -> tuple[int, dict[str, int]]:
        """Soft-delete this instance (no-op if already deleted)."""
        if self.is_deleted:
            return 0, {}
        self.is_active = False
        self.touch()
        update_fields = ["is_active", "updated_at"]
        if audit is not None:
            self.deleted_at = self.updated_at
            self.deleted_by = audit.deleted_by
            self.deletion_reason = audit.reason
            update_fields += ["deleted_at", "deleted_by", "deletion_reason"]
        self.save(using=using, update_fields=update_fields)
        return 1, {self._meta.label: 1}

    def hard_delete(self, using=None, keep_parents=False) -> tuple[int, dict[str, int]]:
        """Permanently remove this record from the database."""
        return super().delete(using=using, keep_parents=keep_parents)
