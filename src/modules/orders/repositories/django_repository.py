"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
All write operations are wrapped in ``transaction.atomic()`` so the
Order aggregate (Order + OrderItems + outbox rows) is persisted
atomically.

Status changes combine ``select_for_update()`` with a conditional
``UPDATE ... WHERE status = <expected>``, so a stale read can never
overwrite a newer status even on backends without row locks.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from modules.core.outbox import flush_domain_events
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        order = Order(
            customer_id=data["customer_id"],
            total_cents=data["total_cents"],
            payment_method=data["payment_method"],
            idempotency_key=data.get("idempotency_key"),
            notes=data.get("notes", ""),
        )
        order.save()

        items = data.get("items", [])
        for position, line in enumerate(items):
            OrderItem(
                order=order,
                product_id=line.product_id,
                position=position,
                name=line.name,
                size=line.size,
                quantity=line.quantity,
                unit_price_cents=line.unit_price_cents,
            ).save()

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            item_count=len(items),
            total_cents=order.total_cents,
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _base_queryset(self):
        return Order.objects.select_related("customer").prefetch_related(
            "items", "status_history"
        )

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._base_queryset().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and eager-loaded relations.

        Supported filter keys include ``status``, ``customer_id`` and
        ``customer__user_id``.
        """
        queryset = self._base_queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_confirmation_code(self, code: str) -> Optional[Order]:
        return self._base_queryset().filter(confirmation_code=code).first()

    def get_by_idempotency_key(self, customer_id: Any, key: str) -> Optional[Order]:
        return (
            self._base_queryset()
            .filter(customer_id=customer_id, idempotency_key=key)
            .first()
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Insert a new order and its pending domain events.

        Existing orders are rejected: a full-row write could overwrite a
        status set concurrently.  Status changes go through
        ``compare_and_set_status``.
        """
        if not entity._state.adding:
            raise ValueError(f"Order {entity.id} already exists")
        entity.save(force_insert=True)
        self.flush_events(entity)
        return entity

    def flush_events(self, entity: Order) -> None:
        flush_domain_events(entity)

    def compare_and_set_status(self, id: UUID, expected: str, new: str) -> bool:
        updated = Order.objects.filter(id=id, status=expected).update(
            status=new, updated_at=timezone.now()
        )
        return updated == 1

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        status: str,
        notes: str = "",
        old_status: Optional[str] = None,
        user: Any = None,
    ) -> OrderStatusHistory:
        """Record a status change in the order's audit trail."""
        history = OrderStatusHistory(
            order_id=order_id,
            old_status=old_status,
            new_status=status,
            notes=notes,
            user=user if getattr(user, "is_authenticated", False) else None,
        )
        history.save()

        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=status,
        )
        return history
