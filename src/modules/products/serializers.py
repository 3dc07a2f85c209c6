"""Product DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.core.formatting import format_price
from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only serializer for catalog entries."""

    price_display = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "size",
            "description",
            "price_cents",
            "price_display",
            "sort_order",
        ]
        read_only_fields = fields

    def get_price_display(self, obj: Product) -> str:
        return format_price(obj.price_cents)
