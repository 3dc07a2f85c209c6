"""Product model for the drink catalog.

Business rules implemented:
- Only active, non-deleted products are sold (the catalog snapshot
  excludes everything else).
- Price is stored in integer cents and can never be negative.
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel), since
  order items keep pointing at the products they were priced from.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import SoftDeleteModel

logger = structlog.get_logger(__name__)


class ProductSize(models.TextChoices):
    HALF_GALLON = "half_gallon", "Half Gallon"
    GALLON = "gallon", "Gallon"


class Product(SoftDeleteModel):
    """Product aggregate root.

    ``name`` doubles as the base of the display string customers see on
    their order (selection suffixes are appended to it at checkout).
    """

    name = models.CharField(max_length=255)
    size = models.CharField(max_length=20, choices=ProductSize.choices)
    description = models.TextField(blank=True, default="")
    price_cents = models.PositiveIntegerField()
    active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["sort_order", "name"]
        indexes = [
            models.Index(fields=["active", "sort_order"], name="products_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                check=models.Q(price_cents__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                size=self.size,
                price_cents=self.price_cents,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.get_size_display()})"
