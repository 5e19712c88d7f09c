"""Product model with code uniqueness and stock control.

Business rules implemented:
- RN-PRO-001: Code must be unique among active products (case-insensitive).
- RN-PRO-002: Owning category must exist and be active (service layer).
- RN-PRO-003: Price must be greater than zero.
- RN-PRO-004: Stock cannot be negative.
- RN-PRO-005: Soft delete via ``is_active`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel


class Product(SoftDeleteModel):
    """Product, the detail side of the catalogue.

    The case-insensitive uniqueness of ``code`` only binds active rows, so
    a soft-deleted product releases its code for reuse.  ``name_key`` and
    ``code_key`` hold the casefolded name and code; uniqueness and search
    compare on them.
    """

    name = models.CharField(max_length=150)
    name_key = models.CharField(max_length=450, editable=False)
    description = models.CharField(  # noqa: DJ01
        max_length=1000, null=True, blank=True
    )
    price = models.DecimalField(max_digits=18, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    code = models.CharField(max_length=50)
    code_key = models.CharField(max_length=150, editable=False)
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="products",
    )

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category", "is_active"], name="products_category_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.UniqueConstraint(
                fields=["code_key"],
                condition=models.Q(is_active=True),
                name="products_code_ci_unique_active",
            ),
        ]

    def save(self, *args, **kwargs):
        self.name_key = self.name.casefold()
        self.code_key = self.code.casefold()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            keys = {"name": "name_key", "code": "code_key"}
            kwargs["update_fields"] = {
                *update_fields,
                *(keys[f] for f in update_fields if f in keys),
            }
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
