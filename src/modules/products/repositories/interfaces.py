"""Product repository interface.

Extends ``IRepository[Product]`` with the active-catalog snapshot the
checkout flow prices against.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.catalog import CatalogSnapshot
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def active_catalog(self) -> CatalogSnapshot:
        """Snapshot every active, non-deleted product."""
