"""Category DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.categories.models import Category
from modules.products.serializers import ProductSerializer


class CategorySerializer(serializers.ModelSerializer):
    """Read-only representation of the Category resource.

    ``totalProductos`` reads the ``active_product_count`` annotation set
    by the repository; records returned without it (partial update)
    render ``0``.
    """

    nombre = serializers.CharField(source="name")
    descripcion = serializers.CharField(source="description", allow_null=True)
    estado = serializers.BooleanField(source="is_active")
    fechaCreacion = serializers.DateTimeField(source="created_at")
    fechaModificacion = serializers.DateTimeField(source="updated_at", allow_null=True)
    totalProductos = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = [
            "id",
            "nombre",
            "descripcion",
            "estado",
            "fechaCreacion",
            "fechaModificacion",
            "totalProductos",
        ]
        read_only_fields = fields

    def get_totalProductos(self, obj: Category) -> int:
        return getattr(obj, "active_product_count", 0)


class CategoryWithProductsSerializer(CategorySerializer):
    """Category plus its active products, each carrying the category name."""

    productos = serializers.SerializerMethodField()

    class Meta(CategorySerializer.Meta):
        fields = [*CategorySerializer.Meta.fields, "productos"]
        read_only_fields = fields

    def get_totalProductos(self, obj: Category) -> int:
        return len(getattr(obj, "active_products", []))

    def get_productos(self, obj: Category) -> list[dict]:
        products = getattr(obj, "active_products", [])
        for product in products:
            # Prefetched rows share the parent instance; no extra query.
            product.category = obj
        return ProductSerializer(products, many=True).data
