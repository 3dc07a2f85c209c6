"""Unit tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.invites.models import Invite
from modules.products.models import Product

pytestmark = pytest.mark.unit

User = get_user_model()


def _seed() -> str:
    out = StringIO()
    call_command("seed_data", "--staff-password", "Manager-Pass-2024!", stdout=out)
    return out.getvalue()


def test_seeds_menu_staff_and_welcome_invite():
    output = _seed()

    assert "Seed completed" in output
    assert Product.objects.count() == 6
    assert User.objects.get(username="manager").is_staff

    invite = Invite.objects.get(code="WELCOME2024")
    assert invite.max_uses == 100
    assert invite.uses == 0
    assert invite.active
    assert invite.expires_at.year == 2030


def test_menu_prices_and_order():
    _seed()

    menu = [(p.name, p.size, p.price_cents) for p in Product.objects.alive()]

    assert menu[0] == ("Kratom Tea - Unflavored (Red/Green/White)", "half_gallon", 2500)
    assert menu[1] == ("Kratom Tea - Unflavored (Red/Green/White)", "gallon", 4000)
    assert ("Kava", "gallon", 5000) in menu


def test_is_idempotent():
    _seed()
    Invite.objects.filter(code="WELCOME2024").update(uses=3)

    _seed()

    assert Product.objects.count() == 6
    assert User.objects.filter(username="manager").count() == 1
    assert Invite.objects.get(code="WELCOME2024").uses == 3
