"""Product service layer (Use Cases).

The catalog is read-only to the ordering core; products are managed
with the ``seed_data`` command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for catalog reads.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    def list_catalog(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Active products in display order."""
        return self._repo.list({**(filters or {}), "active": True})

    def get_product(self, id: str) -> Product:
        """Retrieve a single active product by ID.

        Raises:
            ProductNotFound: missing, soft-deleted or inactive.
        """
        product = self._repo.get_by_id(id)
        if not product or not product.active:
            logger.info("product.not_found", product_id=id)
            raise ProductNotFound(f"Product {id} not found.")
        return product
