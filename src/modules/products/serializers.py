"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and only
renders responses.  Input is parsed into Pydantic DTOs from ``dtos.py``
and validated by the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of the Product resource.

    ``categoriaNombre`` relies on ``category`` being loaded by the
    repository (``select_related``).
    """

    nombre = serializers.CharField(source="name")
    descripcion = serializers.CharField(source="description", allow_null=True)
    precio = serializers.DecimalField(
        source="price", max_digits=18, decimal_places=2, coerce_to_string=False
    )
    codigo = serializers.CharField(source="code")
    estado = serializers.BooleanField(source="is_active")
    fechaCreacion = serializers.DateTimeField(source="created_at")
    fechaModificacion = serializers.DateTimeField(source="updated_at", allow_null=True)
    categoriaId = serializers.IntegerField(source="category_id")
    categoriaNombre = serializers.CharField(source="category.name")

    class Meta:
        model = Product
        fields = [
            "id",
            "nombre",
            "descripcion",
            "precio",
            "stock",
            "codigo",
            "estado",
            "fechaCreacion",
            "fechaModificacion",
            "categoriaId",
            "categoriaNombre",
        ]
        read_only_fields = fields
