"""Celery tasks delivering order emails.

SMTP hiccups are retried with backoff; anything else fails the task
and is logged by Celery.
"""

from __future__ import annotations

from smtplib import SMTPException
from typing import Any, Dict

from celery import shared_task

from modules.notifications import emails
from modules.notifications.dtos import OrderNotificationDTO

RETRY_POLICY = {
    "autoretry_for": (SMTPException, OSError),
    "retry_backoff": True,
    "retry_kwargs": {"max_retries": 3},
}


@shared_task(name="notifications.send_payment_confirmation_email", **RETRY_POLICY)
def send_payment_confirmation_email(payload: Dict[str, Any]) -> int:
    return emails.send_payment_confirmation(OrderNotificationDTO.model_validate(payload))


@shared_task(name="notifications.send_order_confirmation_email", **RETRY_POLICY)
def send_order_confirmation_email(payload: Dict[str, Any]) -> int:
    return emails.send_order_confirmation(OrderNotificationDTO.model_validate(payload))


@shared_task(name="notifications.send_staff_order_alert", **RETRY_POLICY)
def send_staff_order_alert(payload: Dict[str, Any]) -> int:
    return emails.send_staff_alert(OrderNotificationDTO.model_validate(payload))
