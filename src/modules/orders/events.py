"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderEvent(DomainEvent):
    topic: ClassVar[str] = "orders"


@dataclass(frozen=True)
class OrderCreated(OrderEvent):
    """Raised when an order is created."""

    confirmation_code: str = ""
    total_cents: int = 0
    payment_method: str = ""


@dataclass(frozen=True)
class OrderStatusChanged(OrderEvent):
    """Raised when an order status changes."""

    old_status: Optional[str] = None
    new_status: str = ""


@dataclass(frozen=True)
class OrderPaid(OrderEvent):
    """Raised when staff confirm payment for an order."""

    total_cents: int = 0


@dataclass(frozen=True)
class OrderCancelled(OrderEvent):
    """Raised when an order is cancelled."""

    old_status: Optional[str] = None
