"""Category API views.

Exposes the ``CategoryService`` via HTTP using a DRF ViewSet.
Domain exceptions are not caught here: they propagate to
``modules.core.exception_handler``, which picks the status code from
``not_found_actions``.
"""

from __future__ import annotations

from django.apps import apps
from django.urls import reverse
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.dtos import (
    CreateCategoryDTO,
    PartialUpdateCategoryDTO,
    UpdateCategoryDTO,
)
from modules.categories.models import Category
from modules.categories.serializers import (
    CategorySerializer,
    CategoryWithProductsSerializer,
)
from modules.categories.services import CategoryService
from modules.core.dtos import DeletionAuditDTO


def audit_from_request(request: Request) -> DeletionAuditDTO | None:
    """Build the deletion audit when the DELETE body names a user."""
    data = request.data
    if isinstance(data, dict) and "usuarioEliminacion" in data:
        return DeletionAuditDTO.model_validate(data)
    return None


class CategoryViewSet(GenericViewSet):
    """ViewSet for Category CRUD operations.

    The service is built once at startup by ``CategoriesConfig.ready``.
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Category.objects.none()
    serializer_class = CategorySerializer
    lookup_value_regex = r"-?\d+"
    not_found_actions = frozenset({"retrieve", "productos"})

    @property
    def service(self) -> CategoryService:
        return apps.get_app_config("categories").service

    def list(self, request: Request) -> Response:
        """GET /api/categorias"""
        categories = self.service.list_categories()
        return Response(CategorySerializer(categories, many=True).data)

    def retrieve(self, request: Request, pk: str) -> Response:
        """GET /api/categorias/{pk}"""
        category = self.service.get_category(int(pk))
        return Response(CategorySerializer(category).data)

    @action(detail=True, methods=["get"])
    def productos(self, request: Request, pk: str) -> Response:
        """GET /api/categorias/{pk}/productos"""
        category = self.service.get_category_with_products(int(pk))
        return Response(CategoryWithProductsSerializer(category).data)

    def create(self, request: Request) -> Response:
        """POST /api/categorias"""
        dto = CreateCategoryDTO.model_validate(request.data)
        category = self.service.create_category(dto)
        location = reverse("category-detail", args=[category.id])
        return Response(
            CategorySerializer(category).data,
            status=status.HTTP_201_CREATED,
            headers={"Location": request.build_absolute_uri(location)},
        )

    def update(self, request: Request, pk: str) -> Response:
        """PUT /api/categorias/{pk}"""
        dto = UpdateCategoryDTO.model_validate(request.data)
        category = self.service.update_category(int(pk), dto)
        return Response(CategorySerializer(category).data)

    def partial_update(self, request: Request, pk: str) -> Response:
        """PATCH /api/categorias/{pk}"""
        dto = PartialUpdateCategoryDTO.model_validate(request.data)
        category = self.service.partial_update_category(int(pk), dto)
        return Response(CategorySerializer(category).data)

    def destroy(self, request: Request, pk: str) -> Response:
        """DELETE /api/categorias/{pk}

        Send ``{"usuarioEliminacion": ..., "motivoEliminacion": ...}`` to
        record who deleted the category and why.
        """
        deleted = self.service.delete_category(int(pk), audit_from_request(request))
        return Response(
            {"mensaje": "Categoría eliminada correctamente", "eliminada": deleted}
        )
