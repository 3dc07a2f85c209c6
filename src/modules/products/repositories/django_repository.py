"""Django ORM implementation of the Product repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.products.catalog import CatalogSnapshot
from modules.products.dtos import CatalogEntryDTO
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a live product by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Product.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List live products in catalog order.

        Examples of valid filters::

            {"active": True}
            {"size": "gallon", "name__icontains": "kratom"}
        """
        queryset = Product.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("sort_order", "name"))

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        entity.save()
        return entity

    def active_catalog(self) -> CatalogSnapshot:
        products = self.list({"active": True})
        snapshot = CatalogSnapshot(CatalogEntryDTO.from_product(p) for p in products)
        logger.debug("catalog.snapshot_taken", products=len(snapshot))
        return snapshot
