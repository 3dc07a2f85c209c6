"""Confirmation code derivation.

A confirmation code is a pure function of an order's ``id`` and
``created_at``: SHA-256 of their concatenation reduced to its low-order
``CONFIRMATION_CODE_LENGTH`` base-36 digits, zero-padded on the left.
"""

from __future__ import annotations

import hashlib
import string
from datetime import datetime
from typing import Any

from modules.orders.constants import CONFIRMATION_CODE_LENGTH

BASE36_ALPHABET = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def derive_confirmation_code(order_id: Any, created_at: datetime) -> str:
    digest = hashlib.sha256(
        f"{order_id}{created_at.isoformat()}".encode("utf-8")
    ).digest()
    # Low-order digits: the leading digit of a 256-bit value is skewed.
    value = int.from_bytes(digest, "big") % 36**CONFIRMATION_CODE_LENGTH
    return to_base36(value).rjust(CONFIRMATION_CODE_LENGTH, "0")
