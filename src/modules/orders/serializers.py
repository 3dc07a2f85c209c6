"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.  Cart lines are only shape-checked
here; catalog rules (quantity, size, selections) belong to the pricer
so they surface with their own error codes.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.core.formatting import format_price
from modules.orders.constants import PaymentMethod
from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    name = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=255
    )
    size = serializers.CharField(max_length=20)
    quantity = serializers.IntegerField()
    unit_price_cents = serializers.IntegerField(required=False, allow_null=True)


class CheckoutSerializer(serializers.Serializer):
    """Validates the checkout request payload."""

    lines = CartLineSerializer(many=True)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    notes = serializers.CharField(
        required=False, default="", allow_blank=True, max_length=1000
    )


class UpdateStatusSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class CancelOrderSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for the frozen order lines."""

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "name",
            "size",
            "quantity",
            "unit_price_cents",
            "subtotal_cents",
        ]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order status history records."""

    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items and history."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)
    total_display = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "confirmation_code",
            "customer_id",
            "status",
            "payment_method",
            "total_cents",
            "total_display",
            "notes",
            "created_at",
            "updated_at",
            "items",
            "status_history",
        ]
        read_only_fields = fields

    def get_total_display(self, obj: Order) -> str:
        return format_price(obj.total_cents)


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order list (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "confirmation_code",
            "customer_id",
            "status",
            "payment_method",
            "total_cents",
            "created_at",
        ]
        read_only_fields = fields
