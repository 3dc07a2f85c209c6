import pytest

ORDERS_URL = "/api/v1/orders/"


@pytest.fixture()
def kava_line(kava_half):
    return {
        "product_id": str(kava_half.id),
        "name": kava_half.name,
        "size": kava_half.size,
        "quantity": 1,
    }


@pytest.fixture()
def place_order(customer_client, kava_line):
    """POST a one-line kava order as the default customer; return the body."""

    def _place(client=None, **overrides):
        payload = {"lines": [kava_line], "payment_method": "cashapp"}
        payload.update(overrides)
        response = (client or customer_client).post(ORDERS_URL, payload, format="json")
        assert response.status_code == 201, response.content
        return response.json()

    return _place
