"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CartLineDTO``: one client-held cart line as submitted at checkout.
- ``PricedLineDTO`` / ``PricedCartDTO``: the pricer's verdict.
- ``CheckoutDTO``: a customer's checkout request.
- ``CreateOrderDTO``: input for persisting an already-priced order.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

from modules.orders.constants import PaymentMethod

# ---------------------------------------------------------------------------
# Cart (client-held until checkout)
# ---------------------------------------------------------------------------


class CartLineDTO(BaseModel):
    """Immutable cart line.

    ``name`` is the storefront display string and may encode chosen
    options.  ``unit_price_cents`` is the client's claim and is never
    used for pricing.  ``quantity`` is range-checked by the pricer, not
    here, so the failure surfaces as a cart error.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str = ""
    size: str
    quantity: int
    unit_price_cents: Optional[int] = None


class PricedLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    size: str
    quantity: int = Field(ge=1)
    unit_price_cents: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def subtotal_cents(self) -> int:
        return self.unit_price_cents * self.quantity


class PricedCartDTO(BaseModel):
    """Validated cart plus its authoritative total."""

    model_config = ConfigDict(frozen=True)

    items: Tuple[PricedLineDTO, ...]
    total_cents: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class CheckoutDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: List[CartLineDTO]
    payment_method: PaymentMethod
    notes: str = Field(default="", max_length=1000)
    idempotency_key: Optional[str] = Field(default=None, max_length=255)


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order persistence.

    ``total_cents`` is the pricer's total; the ledger recomputes it
    from ``items`` and refuses to persist on disagreement.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: UUID
    items: Tuple[PricedLineDTO, ...] = Field(min_length=1)
    total_cents: int = Field(ge=0)
    payment_method: PaymentMethod
    notes: str = ""
    idempotency_key: Optional[str] = None
