"""Order repository interface.

Extends ``IRepository[Order]`` with methods required by the Order
aggregate: atomic creation with items, status history tracking, the
conditional status write, and the confirmation-code and
idempotency-key look-ups.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes OrderItem children and
    OrderStatusHistory records.  Mutations must be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create a pending order with its items atomically.

        ``data`` must include ``customer_id``, ``items`` (priced lines),
        ``total_cents`` and ``payment_method``, and optionally
        ``notes`` and ``idempotency_key``.
        """

    @abstractmethod
    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def compare_and_set_status(self, id: UUID, expected: str, new: str) -> bool:
        """Set ``status`` to ``new`` only if it is still ``expected``.

        Returns ``False`` when another writer got there first.
        """

    @abstractmethod
    def flush_events(self, entity: Order) -> None:
        """Write the aggregate's pending domain events to the outbox."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user: Any = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""

    @abstractmethod
    def get_by_confirmation_code(self, code: str) -> Optional[Order]:
        """Retrieve an order by its confirmation code."""

    @abstractmethod
    def get_by_idempotency_key(self, customer_id: Any, key: str) -> Optional[Order]:
        """Retrieve a customer's order by its idempotency key."""
