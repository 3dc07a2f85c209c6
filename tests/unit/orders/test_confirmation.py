"""Unit tests for confirmation code derivation."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from uuid import UUID

import pytest
import uuid6

from modules.orders.confirmation import (
    BASE36_ALPHABET,
    derive_confirmation_code,
    to_base36,
)

pytestmark = pytest.mark.unit

ORDER_ID = UUID("0190a6b2-7c1e-7d4a-9f00-123456789abc")
CREATED_AT = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


class TestToBase36:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0"), (35, "Z"), (36, "10"), (46655, "ZZZ")],
    )
    def test_values(self, value, expected):
        assert to_base36(value) == expected

    def test_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)


class TestDeriveConfirmationCode:
    def test_shape(self):
        code = derive_confirmation_code(ORDER_ID, CREATED_AT)
        assert len(code) == 8
        assert code == code.upper()
        assert code.isalnum()

    def test_stable(self):
        assert derive_confirmation_code(ORDER_ID, CREATED_AT) == derive_confirmation_code(
            ORDER_ID, CREATED_AT
        )

    def test_depends_on_both_inputs(self):
        base = derive_confirmation_code(ORDER_ID, CREATED_AT)
        assert derive_confirmation_code(uuid6.uuid7(), CREATED_AT) != base
        assert (
            derive_confirmation_code(ORDER_ID, CREATED_AT.replace(second=1)) != base
        )

    def test_distinct_for_many_orders(self):
        codes = {derive_confirmation_code(uuid6.uuid7(), CREATED_AT) for _ in range(2000)}
        assert len(codes) == 2000

    def test_uses_low_order_digits(self):
        digest = hashlib.sha256(
            f"{ORDER_ID}{CREATED_AT.isoformat()}".encode("utf-8")
        ).digest()
        value = int.from_bytes(digest, "big")
        expected = ""
        for _ in range(8):
            value, remainder = divmod(value, 36)
            expected = BASE36_ALPHABET[remainder] + expected
        assert derive_confirmation_code(ORDER_ID, CREATED_AT) == expected

    def test_leading_character_spans_the_alphabet(self):
        leading = {derive_confirmation_code(uuid6.uuid7(), CREATED_AT)[0] for _ in range(2000)}
        assert len(leading) == 36
