"""Product API views.

The storefront only reads the catalog: list and retrieve of active
products.  Domain exceptions are translated into HTTP status codes.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import error_response
from modules.products.exceptions import ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(ListModelMixin, GenericViewSet):
    """Read-only catalog endpoints, ordered by ``sort_order``."""

    filterset_class = ProductFilter
    search_fields = ["name", "description"]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_queryset(self):
        return Product.objects.alive().filter(active=True).order_by("sort_order", "name")

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk or "")
        except ProductNotFound:
            return error_response(
                "Product not found.", "product_not_found", status.HTTP_404_NOT_FOUND
            )
        return Response(ProductSerializer(product).data)
