"""Display helpers shared by serializers and email templates."""

from __future__ import annotations

from decimal import Decimal


def format_price(cents: int) -> str:
    """Render integer cents as US dollars, e.g. ``2500`` -> ``"$25.00"``."""
    amount = Decimal(cents) / 100
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
