"""Notification payloads.

Plain, JSON-serialisable snapshots of an order, so they can cross the
Celery boundary without touching the ORM again.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, computed_field

if TYPE_CHECKING:
    from modules.orders.models import Order


class NotificationItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    size: str
    quantity: int
    unit_price_cents: int
    subtotal_cents: int


class OrderNotificationDTO(BaseModel):
    """Everything an order email needs to render."""

    model_config = ConfigDict(frozen=True)

    order_id: UUID
    customer_name: str
    customer_email: str
    items: List[NotificationItemDTO]
    total_cents: int
    confirmation_code: str
    payment_method: str = ""
    notes: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def short_id(self) -> str:
        """Last six characters of the order id, as shown in subjects."""
        return str(self.order_id)[-6:].upper()

    @classmethod
    def from_order(cls, order: Order) -> OrderNotificationDTO:
        return cls(
            order_id=order.id,
            customer_name=order.customer.name,
            customer_email=order.customer.email,
            items=[
                NotificationItemDTO(
                    name=item.name,
                    size=item.size,
                    quantity=item.quantity,
                    unit_price_cents=item.unit_price_cents,
                    subtotal_cents=item.subtotal_cents,
                )
                for item in order.items.all()
            ],
            total_cents=order.total_cents,
            confirmation_code=order.confirmation_code,
            payment_method=order.payment_method,
            notes=order.notes,
        )
