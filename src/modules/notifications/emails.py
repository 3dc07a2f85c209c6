"""Order email rendering and delivery through ``django.core.mail``."""

from __future__ import annotations

from typing import Any, Dict

import structlog
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from modules.core.formatting import format_price
from modules.notifications.dtos import OrderNotificationDTO
from modules.orders.constants import PaymentMethod

logger = structlog.get_logger(__name__)


def payment_instructions(payment_method: str, total_cents: int) -> str:
    amount = format_price(total_cents)
    if payment_method == PaymentMethod.CASHAPP:
        return f"Please send {amount} to ${settings.CASHAPP_CASHTAG} via Cash App."
    if payment_method == PaymentMethod.ZELLE:
        return f"Please send {amount} to {settings.ZELLE_RECIPIENT} via Zelle."
    return f"Please send {amount} using the payment method you selected."


def _context(payload: OrderNotificationDTO) -> Dict[str, Any]:
    return {
        "brand": settings.BRAND_NAME,
        "order": payload,
        "total": format_price(payload.total_cents),
        "items": [
            {
                "name": item.name,
                "size": item.size.replace("_", " "),
                "quantity": item.quantity,
                "subtotal": format_price(item.subtotal_cents),
            }
            for item in payload.items
        ],
        "payment_method_label": _payment_label(payload.payment_method),
        "payment_instructions": payment_instructions(
            payload.payment_method, payload.total_cents
        ),
    }


def _payment_label(payment_method: str) -> str:
    try:
        return PaymentMethod(payment_method).label
    except ValueError:
        return payment_method


def _send(template: str, subject: str, recipient: str, payload: OrderNotificationDTO) -> int:
    context = _context(payload)
    text_body = render_to_string(f"notifications/{template}.txt", context)
    html_body = render_to_string(f"notifications/{template}.html", context)
    sent = send_mail(
        subject=subject,
        message=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[recipient],
        html_message=html_body,
    )
    logger.info(
        "notification.email_sent",
        template=template,
        order_id=str(payload.order_id),
    )
    return sent


def send_payment_confirmation(payload: OrderNotificationDTO) -> int:
    subject = f"Payment Received - Order #{payload.short_id} - {settings.BRAND_NAME}"
    return _send("payment_confirmation", subject, payload.customer_email, payload)


def send_order_confirmation(payload: OrderNotificationDTO) -> int:
    subject = f"Order Confirmation #{payload.short_id} - {settings.BRAND_NAME}"
    return _send("order_confirmation", subject, payload.customer_email, payload)


def send_staff_alert(payload: OrderNotificationDTO) -> int:
    subject = f"New Order #{payload.short_id} - {settings.BRAND_NAME}"
    return _send("staff_order_alert", subject, settings.ORDER_NOTIFICATION_EMAIL, payload)
