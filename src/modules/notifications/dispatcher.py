"""Notification dispatcher contract and its Celery-backed implementation.

The order ledger only knows ``INotificationDispatcher``.  Dispatch is
fire-and-forget: callers log and swallow any exception raised here.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from modules.notifications.dtos import OrderNotificationDTO

logger = structlog.get_logger(__name__)


class INotificationDispatcher(Protocol):
    def payment_confirmed(self, payload: OrderNotificationDTO) -> None:
        """Tell the customer their payment was received."""

    def order_placed(self, payload: OrderNotificationDTO) -> None:
        """Send the customer receipt and the staff new-order alert."""


class CeleryNotificationDispatcher:
    """Enqueues one Celery task per email."""

    def payment_confirmed(self, payload: OrderNotificationDTO) -> None:
        from modules.notifications.tasks import send_payment_confirmation_email

        send_payment_confirmation_email.delay(payload.model_dump(mode="json"))
        logger.info(
            "notification.enqueued",
            kind="payment_confirmed",
            order_id=str(payload.order_id),
        )

    def order_placed(self, payload: OrderNotificationDTO) -> None:
        from modules.notifications.tasks import (
            send_order_confirmation_email,
            send_staff_order_alert,
        )

        data = payload.model_dump(mode="json")
        send_order_confirmation_email.delay(data)
        send_staff_order_alert.delay(data)
        logger.info(
            "notification.enqueued",
            kind="order_placed",
            order_id=str(payload.order_id),
        )
