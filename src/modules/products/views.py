"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions propagate to ``modules.core.exception_handler``.
"""

from __future__ import annotations

from django.apps import apps
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.views import audit_from_request
from modules.products.dtos import (
    CreateProductDTO,
    PartialUpdateProductDTO,
    UpdateProductDTO,
)
from modules.products.models import Product
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD, search and per-category listing.

    Uses the ``ProductService`` built by ``ProductsConfig.ready`` (DIP).
    """

    queryset = Product.objects.none()
    serializer_class = ProductSerializer
    lookup_value_regex = r"-?\d+"
    not_found_actions = frozenset({"retrieve"})

    @property
    def service(self) -> ProductService:
        return apps.get_app_config("products").service

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/productos"""
        products = self.service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/productos/{pk}"""
        product = self.service.get_product(int(pk))
        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=["get"])
    def buscar(self, request: Request) -> Response:
        """GET /api/productos/buscar?q=term"""
        products = self.service.search_products(request.query_params.get("q"))
        return Response(ProductSerializer(products, many=True).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"categoria/(?P<category_id>-?\d+)",
    )
    def categoria(self, request: Request, category_id: str) -> Response:
        """GET /api/productos/categoria/{category_id}"""
        products = self.service.list_by_category(int(category_id))
        return Response(ProductSerializer(products, many=True).data)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/productos"""
        dto = CreateProductDTO.model_validate(request.data)
        product = self.service.create_product(dto)
        location = reverse("product-detail", args=[product.id])
        return Response(
            ProductSerializer(product).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": request.build_absolute_uri(location)},
        )

    def update(self, request: Request, pk: str) -> Response:
        """PUT /api/productos/{pk}"""
        dto = UpdateProductDTO.model_validate(request.data)
        product = self.service.update_product(int(pk), dto)
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str) -> Response:
        """PATCH /api/productos/{pk}"""
        dto = PartialUpdateProductDTO.model_validate(request.data)
        product = self.service.partial_update_product(int(pk), dto)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/productos/{pk}"""
        deleted = self.service.delete_product(int(pk), audit_from_request(request))
        return Response(
            {"mensaje": "Producto eliminado correctamente", "eliminado": deleted}
        )
