"""Order service layer (Use Cases).

Orchestrates checkout, order creation and the status state machine.
All write operations are atomic: the service defines the unit-of-work
boundary.

Business rules enforced:
- Only active customers check out.
- Carts are validated and priced against a catalog snapshot taken in
  the same transaction that persists the order.
- Stored totals always match the items (``PriceMismatchInternal`` otherwise).
- Status transitions follow ``VALID_TRANSITIONS``; the write is a
  compare-and-set on the status read under lock, retried on conflict.
- History and outbox rows are recorded on every status change.
- Emails are best-effort: a dispatcher failure is logged and never
  undoes or blocks a committed change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple
from uuid import UUID

import structlog
from django.conf import settings
from django.db import transaction

from modules.notifications.dtos import OrderNotificationDTO
from modules.orders.constants import NOTIFY_ON_ENTER, OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.events import (
    OrderCancelled,
    OrderCreated,
    OrderPaid,
    OrderStatusChanged,
)
from modules.orders.exceptions import (
    ConflictRetry,
    InvalidTransition,
    OrderNotFound,
    PriceMismatchInternal,
)
from modules.orders.pricing import validate_and_price

if TYPE_CHECKING:
    from modules.customers.services import CustomerService
    from modules.notifications.dispatcher import INotificationDispatcher
    from modules.orders.dtos import CheckoutDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories, the customer service and the notification
    dispatcher via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        customer_service: CustomerService,
        notifier: INotificationDispatcher,
        max_attempts: Optional[int] = None,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._customers = customer_service
        self._notifier = notifier
        self._max_attempts = max_attempts or settings.ORDER_TRANSITION_MAX_ATTEMPTS

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def checkout(self, user: Any, dto: CheckoutDTO) -> Tuple[Order, bool]:
        """Price the cart and create a pending order for ``user``.

        Returns ``(order, created)``; ``created`` is ``False`` when the
        idempotency key matched an earlier order of the same customer.

        Raises:
            CustomerNotFound / InactiveCustomer: no usable profile.
            CartError: the cart failed validation.
            PriceMismatchInternal: persisted total disagrees with the pricer.
        """
        with transaction.atomic():
            customer = self._customers.get_active_for_user(user)
            log = logger.bind(customer_id=str(customer.id))

            if dto.idempotency_key:
                existing = self._order_repo.get_by_idempotency_key(
                    customer.id, dto.idempotency_key
                )
                if existing:
                    log.info("order.idempotency_hit", order_id=str(existing.id))
                    return existing, False

            snapshot = self._product_repo.active_catalog()
            priced = validate_and_price(dto.lines, snapshot)
            order = self.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    items=priced.items,
                    total_cents=priced.total_cents,
                    payment_method=dto.payment_method,
                    notes=dto.notes,
                    idempotency_key=dto.idempotency_key,
                )
            )

        self._notify("order_placed", order)
        return order, True

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Persist a priced order in ``pending`` with its items.

        Raises:
            PriceMismatchInternal: ``dto.total_cents`` differs from the
                sum recomputed over the persisted items.  Nothing is kept.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info("order.creation_started", item_count=len(dto.items))

        order = self._order_repo.create(
            {
                "customer_id": dto.customer_id,
                "items": dto.items,
                "total_cents": dto.total_cents,
                "payment_method": dto.payment_method,
                "notes": dto.notes,
                "idempotency_key": dto.idempotency_key,
            }
        )

        try:
            order.assert_total_consistent()
        except PriceMismatchInternal:
            log.error(
                "order.price_mismatch",
                order_id=str(order.id),
                expected_cents=dto.total_cents,
                recomputed_cents=order.recompute_total(),
            )
            raise

        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                confirmation_code=order.confirmation_code,
                total_cents=order.total_cents,
                payment_method=order.payment_method,
            )
        )
        self._order_repo.flush_events(order)
        self._order_repo.add_history(
            order_id=order.id,
            status=OrderStatus.PENDING,
            notes="Order created",
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            total_cents=order.total_cents,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    def update_status(
        self,
        order_id: UUID,
        new_status: str,
        notes: str = "",
        user: Any = None,
    ) -> Order:
        """Move an order to ``new_status``.

        Each attempt runs in its own transaction: lock-read the order,
        check the edge, then compare-and-set the status.  A lost
        compare-and-set is retried up to ``max_attempts`` times.

        Raises:
            OrderNotFound: order does not exist.
            InvalidTransition: the edge is not allowed from the current status.
            ConflictRetry: still conflicting after the last attempt.
        """
        log = logger.bind(order_id=str(order_id), new_status=new_status)

        for attempt in range(1, self._max_attempts + 1):
            try:
                order = self._apply_transition(order_id, new_status, notes, user)
                break
            except ConflictRetry:
                log.warning("order.transition_conflict", attempt=attempt)
                if attempt == self._max_attempts:
                    raise

        log.info("order.status_updated")
        if new_status in NOTIFY_ON_ENTER:
            self._notify("payment_confirmed", order)
        return order

    def cancel_order(self, order_id: UUID, notes: str = "", user: Any = None) -> Order:
        """Cancel an order (``pending`` or ``awaiting_payment`` only)."""
        return self.update_status(
            order_id, OrderStatus.CANCELLED, notes=notes or "Order cancelled", user=user
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def get_by_confirmation_code(self, code: str) -> Order:
        """Retrieve an order by confirmation code (case-insensitive input).

        Raises:
            OrderNotFound: no order carries that code.
        """
        order = self._order_repo.get_by_confirmation_code((code or "").strip().upper())
        if not order:
            raise OrderNotFound(f"Order with confirmation code {code!r} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """Return a list of orders, optionally filtered."""
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @transaction.atomic
    def _apply_transition(
        self, order_id: UUID, new_status: str, notes: str, user: Any
    ) -> Order:
        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        old_status = order.status
        log = logger.bind(
            order_id=str(order_id),
            current_status=old_status,
            new_status=new_status,
        )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidTransition(order.id, old_status, new_status)

        if not self._order_repo.compare_and_set_status(
            order.id, expected=old_status, new=new_status
        ):
            raise ConflictRetry(f"Order {order_id} changed while updating status.")

        order.status = new_status
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id, old_status=old_status, new_status=new_status
            )
        )
        if new_status == OrderStatus.PAID:
            order.add_domain_event(
                OrderPaid(aggregate_id=order.id, total_cents=order.total_cents)
            )
        elif new_status == OrderStatus.CANCELLED:
            order.add_domain_event(
                OrderCancelled(aggregate_id=order.id, old_status=old_status)
            )
        self._order_repo.flush_events(order)

        self._order_repo.add_history(
            order_id=order.id,
            status=new_status,
            notes=notes,
            old_status=old_status,
            user=user,
        )
        return self._order_repo.get_by_id(str(order_id)) or order

    def _notify(self, kind: str, order: Order) -> None:
        try:
            getattr(self._notifier, kind)(OrderNotificationDTO.from_order(order))
        except Exception:
            logger.exception(
                "order.notification_failed",
                order_id=str(order.id),
                kind=kind,
            )
