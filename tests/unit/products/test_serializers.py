from __future__ import annotations

import pytest

from modules.products.serializers import ProductSerializer

pytestmark = pytest.mark.unit


def test_product_serializer(kratom_half):
    data = ProductSerializer(kratom_half).data

    assert data["id"] == str(kratom_half.id)
    assert data["price_cents"] == 2500
    assert data["price_display"] == "$25.00"
    assert data["size"] == "half_gallon"
    assert "active" not in data
    assert "deleted_at" not in data
