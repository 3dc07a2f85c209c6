"""Unit tests for cart validation and pricing.

``validate_and_price`` is pure, so these tests build catalog snapshots
in memory and never touch the database.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.orders.dtos import CartLineDTO
from modules.orders.exceptions import (
    CartError,
    EmptyCart,
    InvalidQuantity,
    MissingSelection,
    ProductNotFound,
    SizeMismatch,
)
from modules.orders.pricing import (
    Selection,
    parse_selection,
    render_display_name,
    required_selections,
    validate_and_price,
)
from modules.products.catalog import CatalogSnapshot
from modules.products.dtos import CatalogEntryDTO

pytestmark = pytest.mark.unit

UNFLAVORED = "Kratom Tea - Unflavored (Red/Green/White)"
FLAVORED = "Kratom Tea - Flavored (Red/Green/White)"

KRATOM_HALF = CatalogEntryDTO(
    product_id=uuid4(), name=UNFLAVORED, size="half_gallon", price_cents=2500
)
FLAVORED_GALLON = CatalogEntryDTO(
    product_id=uuid4(), name=FLAVORED, size="gallon", price_cents=5000
)
KAVA_HALF = CatalogEntryDTO(
    product_id=uuid4(), name="Kava", size="half_gallon", price_cents=3000
)
CATALOG = CatalogSnapshot([KRATOM_HALF, FLAVORED_GALLON, KAVA_HALF])


def _line(entry: CatalogEntryDTO, name: str | None = None, **overrides) -> CartLineDTO:
    data = {
        "product_id": entry.product_id,
        "name": entry.name if name is None else name,
        "size": entry.size,
        "quantity": 1,
    }
    data.update(overrides)
    return CartLineDTO(**data)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestPricing:
    def test_two_half_gallons_of_red_kratom(self):
        priced = validate_and_price(
            [_line(KRATOM_HALF, f"{UNFLAVORED} (Red)", quantity=2)], CATALOG
        )

        assert priced.total_cents == 5000
        (item,) = priced.items
        assert item.unit_price_cents == 2500
        assert item.subtotal_cents == 5000
        assert item.name == f"{UNFLAVORED} (Red)"

    def test_total_is_sum_of_lines(self):
        priced = validate_and_price(
            [
                _line(KAVA_HALF, quantity=3),
                _line(FLAVORED_GALLON, f"{FLAVORED} (Green) - Mango (Light Flavor)"),
            ],
            CATALOG,
        )

        assert priced.total_cents == 3 * 3000 + 5000
        assert [i.subtotal_cents for i in priced.items] == [9000, 5000]

    def test_client_price_is_ignored(self, caplog):
        priced = validate_and_price(
            [_line(KAVA_HALF, unit_price_cents=1)], CATALOG
        )

        assert priced.total_cents == 3000
        assert any(
            "cart.client_price_ignored" in r.getMessage() for r in caplog.records
        )

    def test_product_without_options_keeps_catalog_name(self):
        priced = validate_and_price([_line(KAVA_HALF, "Anything the client says")], CATALOG)
        assert priced.items[0].name == "Kava"

    def test_irrelevant_options_are_dropped(self):
        priced = validate_and_price(
            [_line(KRATOM_HALF, f"{UNFLAVORED} (White) - Peach (Regular Flavor)")],
            CATALOG,
        )
        assert priced.items[0].name == f"{UNFLAVORED} (White)"

    def test_same_product_on_two_lines(self):
        priced = validate_and_price(
            [
                _line(KRATOM_HALF, f"{UNFLAVORED} (Red)"),
                _line(KRATOM_HALF, f"{UNFLAVORED} (Mix)", quantity=2),
            ],
            CATALOG,
        )
        assert priced.total_cents == 7500
        assert len(priced.items) == 2


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


class TestRejections:
    def test_empty_cart(self):
        with pytest.raises(EmptyCart):
            validate_and_price([], CATALOG)

    def test_unknown_product(self):
        line = CartLineDTO(product_id=uuid4(), name="Ghost", size="gallon", quantity=1)
        with pytest.raises(ProductNotFound) as excinfo:
            validate_and_price([line], CATALOG)
        assert excinfo.value.line == 0
        assert excinfo.value.code == "product_not_found"

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_invalid_quantity(self, quantity):
        with pytest.raises(InvalidQuantity):
            validate_and_price([_line(KAVA_HALF, quantity=quantity)], CATALOG)

    def test_size_mismatch(self):
        with pytest.raises(SizeMismatch):
            validate_and_price([_line(KAVA_HALF, size="gallon")], CATALOG)

    def test_kratom_without_strain(self):
        with pytest.raises(MissingSelection) as excinfo:
            validate_and_price([_line(KRATOM_HALF)], CATALOG)
        assert "strain" in str(excinfo.value)

    def test_flavored_without_flavor(self):
        with pytest.raises(MissingSelection) as excinfo:
            validate_and_price([_line(FLAVORED_GALLON, f"{FLAVORED} (Red)")], CATALOG)
        assert "flavor" in str(excinfo.value)
        assert "intensity" in str(excinfo.value)

    def test_flavored_without_intensity(self):
        with pytest.raises(MissingSelection):
            validate_and_price(
                [_line(FLAVORED_GALLON, f"{FLAVORED} (Red) - Mango")], CATALOG
            )

    def test_error_points_at_offending_line(self):
        with pytest.raises(MissingSelection) as excinfo:
            validate_and_price([_line(KAVA_HALF), _line(KRATOM_HALF)], CATALOG)
        assert excinfo.value.line == 1

    def test_checks_run_in_order(self):
        # Quantity is checked before size and selections.
        with pytest.raises(InvalidQuantity):
            validate_and_price(
                [_line(KRATOM_HALF, quantity=0, size="gallon")], CATALOG
            )

    def test_all_errors_are_cart_errors(self):
        with pytest.raises(CartError):
            validate_and_price([], CATALOG)


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------


class TestSelections:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Kava", ()),
            (UNFLAVORED, ("strain",)),
            (FLAVORED, ("strain", "flavor", "intensity")),
            ("Flavored Kava", ("flavor", "intensity")),
        ],
    )
    def test_required_selections(self, name, expected):
        assert required_selections(name) == expected

    def test_parse_full_selection(self):
        selection = parse_selection(
            FLAVORED, f"{FLAVORED} (Green) - Strawberry (Regular Flavor)"
        )
        assert selection == Selection("Green", "Strawberry", "Regular")

    @pytest.mark.parametrize(
        "display",
        [
            "Something else (Red)",
            f"{UNFLAVORED} (Purple)",
            f"{UNFLAVORED}(Red)",
            f"{UNFLAVORED} (Red) extra",
        ],
    )
    def test_unrecognised_suffix_gives_empty_selection(self, display):
        assert parse_selection(UNFLAVORED, display) == Selection()

    def test_render_round_trips(self):
        selection = Selection("White", "Peach", "Light")
        rendered = render_display_name(FLAVORED, selection)
        assert rendered == f"{FLAVORED} (White) - Peach (Light Flavor)"
        assert parse_selection(FLAVORED, rendered) == selection
