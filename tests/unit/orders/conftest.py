from unittest.mock import MagicMock

import pytest

from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.dtos import CartLineDTO, CheckoutDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture()
def notifier():
    return MagicMock(name="notifier")


@pytest.fixture()
def order_service(notifier):
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
        customer_service=CustomerService(repository=CustomerDjangoRepository()),
        notifier=notifier,
    )


@pytest.fixture()
def make_order(order_service, customer, kava_half):
    """Check out one half gallon of kava, optionally forcing a status."""

    def _make(status=None, quantity=1, payment_method="cashapp") -> Order:
        order, _ = order_service.checkout(
            customer.user,
            CheckoutDTO(
                lines=[
                    CartLineDTO(
                        product_id=kava_half.id,
                        name=kava_half.name,
                        size=kava_half.size,
                        quantity=quantity,
                    )
                ],
                payment_method=payment_method,
            ),
        )
        if status is not None:
            Order.objects.filter(id=order.id).update(status=status)
            order.refresh_from_db()
        return order

    return _make
