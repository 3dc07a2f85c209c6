"""Order, OrderItem, and OrderStatusHistory models.

Business rules implemented:
- Orders are created ``pending`` and only change status through
  ``OrderService.update_status`` (conditional write, never a blind save).
- ``confirmation_code`` is derived from ``(id, created_at)`` before the
  first insert and never changes afterwards.
- ``total_cents`` always equals the sum of the items' subtotals
  (``assert_total_consistent``).
- Items are a frozen snapshot: name, size and unit price are copied
  from the catalog at checkout and never recomputed.
- Each status change generates a history record.
- Orders are never deleted; customer and product FKs use PROTECT.
- Idempotency via ``idempotency_key`` unique constraint.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.confirmation import derive_confirmation_code
from modules.orders.constants import (
    CONFIRMATION_CODE_LENGTH,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    OrderStatus,
    PaymentMethod,
)
from modules.orders.exceptions import PriceMismatchInternal
from shared.domain.events import DomainEventMixin


class Order(DomainEventMixin, BaseModel):
    """Order aggregate root.

    ``idempotency_key`` is unique per customer and nullable: only
    checkouts that send an ``Idempotency-Key`` header carry one, and NULLs
    never collide in a unique constraint.
    """

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    payment_method: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
    )
    total_cents: models.PositiveIntegerField = models.PositiveIntegerField(default=0)
    confirmation_code: models.CharField = models.CharField(
        max_length=CONFIRMATION_CODE_LENGTH, unique=True, editable=False
    )
    notes: models.TextField = models.TextField(blank=True, default="")
    idempotency_key: models.CharField = models.CharField(
        max_length=255,
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["customer", "idempotency_key"],
                name="orders_customer_idempotency_key_uniq",
            ),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def recompute_total(self) -> int:
        return sum(item.subtotal_cents for item in self.items.all())

    def assert_total_consistent(self) -> None:
        recomputed = self.recompute_total()
        if recomputed != self.total_cents:
            raise PriceMismatchInternal(
                f"Order {self.id}: stored total {self.total_cents} "
                f"!= recomputed {recomputed}."
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.confirmation_code:
            self.confirmation_code = derive_confirmation_code(self.id, self.created_at)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.confirmation_code} ({self.status})"


class OrderItem(BaseModel):
    """Frozen line of an order.

    ``name`` is the display string at checkout (base product name plus
    any chosen options).  ``subtotal_cents`` is always
    ``quantity * unit_price_cents``, recalculated on every save.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    position: models.PositiveSmallIntegerField = models.PositiveSmallIntegerField(
        default=0
    )
    name: models.CharField = models.CharField(max_length=255)
    size: models.CharField = models.CharField(max_length=20)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    unit_price_cents: models.PositiveIntegerField = models.PositiveIntegerField()
    subtotal_cents: models.PositiveIntegerField = models.PositiveIntegerField(
        editable=False
    )

    class Meta:
        db_table = "order_items"
        ordering = ["position", "created_at"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    def save(self, *args: Any, **kwargs: Any) -> None:
        self.subtotal_cents = self.quantity * self.unit_price_cents
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} ({self.subtotal_cents}c)"


class OrderStatusHistory(BaseModel):
    """Append-only audit trail for order status transitions.

    ``user`` is nullable: ``None`` means the change was performed by the
    system (e.g. order creation).
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="status_history",
    )
    old_status: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStatus.choices,
        null=True,
        blank=True,
    )
    new_status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
    )
    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    notes: models.TextField = models.TextField(blank=True, default="")

    class Meta:
        db_table = "order_status_history"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["order", "-created_at"],
                name="osh_order_created_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order} : {self.old_status} -> {self.new_status}"
