"""Category model (master side of the catalogue).

Business rules implemented:
- RN-CAT-001: Name is unique among active categories, case-insensitive
  (service check + partial unique index on the casefolded ``name_key``).
- RN-CAT-002: A category with active products cannot be soft-deleted
  (enforced at service layer).
- RN-CAT-003: Soft delete via ``is_active`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel


class Category(SoftDeleteModel):
    """Category aggregate root.

    ``name_key`` is ``name.casefold()``, kept in step by ``save()`` so that
    accented letters compare case-insensitively on every backend.

    ``active_product_count`` is not a column: repositories annotate it on
    read queries (see ``CategoryDjangoRepository``).
    """

    name = models.CharField(max_length=100)
    name_key = models.CharField(max_length=300, editable=False)
    description = models.CharField(  # noqa: DJ01
        max_length=500, null=True, blank=True
    )

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["name_key"],
                condition=models.Q(is_active=True),
                name="categories_name_ci_unique_active",
            ),
        ]

    def save(self, *args, **kwargs):
        self.name_key = self.name.casefold()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "name" in update_fields:
            kwargs["update_fields"] = {*update_fields, "name_key"}
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
