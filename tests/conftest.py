from datetime import datetime, timezone

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.invites.models import Invite
from modules.products.models import Product, ProductSize

User = get_user_model()

STRONG_PASSWORD = "Kava-Lounge-2024!"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_customer():
    """Factory for a user plus customer profile."""

    def _make(email="jane@example.com", name="Jane Doe", **overrides):
        user = User.objects.create_user(
            username=email, email=email, password=STRONG_PASSWORD
        )
        return Customer.objects.create(
            user=user,
            name=name,
            email=email,
            invite_code=overrides.pop("invite_code", "WELCOME2024"),
            **overrides,
        )

    return _make


@pytest.fixture()
def customer(make_customer):
    return make_customer()


@pytest.fixture()
def customer_client(customer):
    client = APIClient()
    client.force_authenticate(user=customer.user)
    return client


@pytest.fixture()
def staff_user():
    return User.objects.create_user(
        username="manager", password=STRONG_PASSWORD, is_staff=True
    )


@pytest.fixture()
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@pytest.fixture()
def kratom_half():
    return Product.objects.create(
        name="Kratom Tea - Unflavored (Red/Green/White)",
        size=ProductSize.HALF_GALLON,
        price_cents=2500,
        sort_order=1,
    )


@pytest.fixture()
def flavored_gallon():
    return Product.objects.create(
        name="Kratom Tea - Flavored (Red/Green/White)",
        size=ProductSize.GALLON,
        price_cents=5000,
        sort_order=4,
    )


@pytest.fixture()
def kava_half():
    return Product.objects.create(
        name="Kava",
        size=ProductSize.HALF_GALLON,
        price_cents=3000,
        sort_order=5,
    )


# ---------------------------------------------------------------------------
# Invites
# ---------------------------------------------------------------------------


@pytest.fixture()
def welcome_invite():
    return Invite.objects.create(
        code="WELCOME2024",
        max_uses=100,
        expires_at=datetime(2030, 12, 31, tzinfo=timezone.utc),
    )


@pytest.fixture()
def single_use_invite():
    return Invite.objects.create(code="FRIEND-0001", max_uses=1)
