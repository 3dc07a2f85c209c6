"""Unit tests for order email rendering and delivery."""

from __future__ import annotations

from uuid import UUID

import pytest
from django.core import mail

from modules.notifications import emails
from modules.notifications.dtos import NotificationItemDTO, OrderNotificationDTO

pytestmark = pytest.mark.unit


@pytest.fixture()
def payload():
    return OrderNotificationDTO(
        order_id=UUID("0190a6b2-7c1e-7d4a-9f00-123456abcdef"),
        customer_name="Jane Doe",
        customer_email="jane@example.com",
        items=[
            NotificationItemDTO(
                name="Kratom Tea - Unflavored (Red/Green/White) (Red)",
                size="half_gallon",
                quantity=2,
                unit_price_cents=2500,
                subtotal_cents=5000,
            )
        ],
        total_cents=5000,
        confirmation_code="K7Q2M9XA",
        payment_method="cashapp",
        notes="Ring twice & wait",
    )


class TestPaymentInstructions:
    def test_cashapp(self, settings):
        settings.CASHAPP_CASHTAG = "kavabar"
        assert (
            emails.payment_instructions("cashapp", 5000)
            == "Please send $50.00 to $kavabar via Cash App."
        )

    def test_zelle(self, settings):
        settings.ZELLE_RECIPIENT = "305-555-0100"
        assert (
            emails.payment_instructions("zelle", 2500)
            == "Please send $25.00 to 305-555-0100 via Zelle."
        )

    def test_unknown_method(self):
        assert "$1.00" in emails.payment_instructions("cash", 100)


class TestPaymentConfirmation:
    def test_sends_to_customer(self, payload, settings):
        settings.BRAND_NAME = "Lowkey Kava"

        emails.send_payment_confirmation(payload)

        (message,) = mail.outbox
        assert message.to == ["jane@example.com"]
        assert message.subject == "Payment Received - Order #ABCDEF - Lowkey Kava"
        assert "K7Q2M9XA" in message.body
        assert "$50.00" in message.body
        html, mimetype = message.alternatives[0]
        assert mimetype == "text/html"
        assert "Jane Doe" in html


class TestOrderPlaced:
    def test_order_confirmation(self, payload, settings):
        settings.BRAND_NAME = "Lowkey Kava"

        emails.send_order_confirmation(payload)

        (message,) = mail.outbox
        assert message.to == ["jane@example.com"]
        assert message.subject == "Order Confirmation #ABCDEF - Lowkey Kava"
        assert "via Cash App" in message.body

    def test_staff_alert(self, payload, settings):
        settings.BRAND_NAME = "Lowkey Kava"
        settings.ORDER_NOTIFICATION_EMAIL = "staff@example.com"

        emails.send_staff_alert(payload)

        (message,) = mail.outbox
        assert message.to == ["staff@example.com"]
        assert message.subject == "New Order #ABCDEF - Lowkey Kava"
        assert "jane@example.com" in message.body
        assert "Ring twice & wait" in message.body
        assert "Ring twice &amp; wait" in message.alternatives[0][0]


def test_short_id_is_last_six_upper(payload):
    assert payload.short_id == "ABCDEF"
