"""Product DTOs.

``CatalogEntryDTO`` is the frozen, framework-agnostic view of one
sellable product that the cart pricer reads.  It carries no ORM state,
so a snapshot taken at the start of a checkout cannot change underneath
the pricer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from modules.products.models import Product


class CatalogEntryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    size: str
    price_cents: int = Field(ge=0)

    @classmethod
    def from_product(cls, product: Product) -> CatalogEntryDTO:
        return cls(
            product_id=product.id,
            name=product.name,
            size=product.size,
            price_cents=product.price_cents,
        )
