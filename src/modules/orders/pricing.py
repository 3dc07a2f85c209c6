"""Cart validation and pricing.

``validate_and_price`` is a pure function of the submitted cart and a
catalog snapshot.  Unit prices always come from the snapshot; whatever
price the client attached to a line is ignored.

Products that need a sub-option carry it in the line's display name,
in the storefront's format::

    <Product> (<Strain>) - <Flavor> (<Light|Regular> Flavor)

Names containing "Kratom" need a strain; names containing "Flavored"
(but not "Unflavored") also need a flavor and an intensity.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import structlog

from modules.orders.dtos import CartLineDTO, PricedCartDTO, PricedLineDTO
from modules.orders.exceptions import (
    EmptyCart,
    InvalidQuantity,
    MissingSelection,
    ProductNotFound,
    SizeMismatch,
)
from modules.products.catalog import CatalogSnapshot

logger = structlog.get_logger(__name__)

STRAINS = ("Red", "Green", "White", "Mix")
FLAVORS = ("Strawberry", "Mango", "Peach")
INTENSITIES = ("Light", "Regular")

SELECTION_SUFFIX_RE = re.compile(
    rf"^(?: \((?P<strain>{'|'.join(STRAINS)})\))?"
    rf"(?: - (?P<flavor>{'|'.join(FLAVORS)}))?"
    rf"(?: \((?P<intensity>{'|'.join(INTENSITIES)}) Flavor\))?$"
)


@dataclass(frozen=True)
class Selection:
    strain: Optional[str] = None
    flavor: Optional[str] = None
    intensity: Optional[str] = None


def required_selections(product_name: str) -> Tuple[str, ...]:
    required: Tuple[str, ...] = ()
    if "Kratom" in product_name:
        required += ("strain",)
    if "Flavored" in product_name and "Unflavored" not in product_name:
        required += ("flavor", "intensity")
    return required


def parse_selection(base_name: str, display_name: str) -> Selection:
    """Read the options encoded after ``base_name`` in ``display_name``.

    Anything that does not follow the storefront format yields an empty
    selection.
    """
    if not display_name.startswith(base_name):
        return Selection()
    match = SELECTION_SUFFIX_RE.match(display_name[len(base_name):])
    if match is None:
        return Selection()
    return Selection(**match.groupdict())


def render_display_name(base_name: str, selection: Selection) -> str:
    name = base_name
    if selection.strain:
        name += f" ({selection.strain})"
    if selection.flavor:
        name += f" - {selection.flavor}"
    if selection.intensity:
        name += f" ({selection.intensity} Flavor)"
    return name


def validate_and_price(
    cart_lines: Iterable[CartLineDTO], catalog: CatalogSnapshot
) -> PricedCartDTO:
    """Validate every line against ``catalog`` and compute the total.

    Raises:
        EmptyCart: no lines.
        ProductNotFound: a product is not in the active catalog.
        InvalidQuantity: a quantity below one.
        SizeMismatch: a line's size differs from the product's.
        MissingSelection: a required strain/flavor/intensity is absent.
    """
    lines = list(cart_lines)
    if not lines:
        raise EmptyCart("Your cart is empty.")

    priced = []
    for index, line in enumerate(lines):
        entry = catalog.lookup(line.product_id)
        if entry is None:
            raise ProductNotFound(
                f"Product {line.product_id} is not available.", line=index
            )
        if line.quantity < 1:
            raise InvalidQuantity(
                f"Quantity for {entry.name} must be at least 1.", line=index
            )
        if line.size != entry.size:
            raise SizeMismatch(
                f"{entry.name} is sold as {entry.size}, not {line.size}.", line=index
            )

        required = required_selections(entry.name)
        selection = parse_selection(entry.name, line.name)
        missing = [option for option in required if getattr(selection, option) is None]
        if missing:
            raise MissingSelection(
                f"Please select a {', '.join(missing)} for {entry.name}.", line=index
            )
        kept = Selection(
            **{option: getattr(selection, option) for option in required}
        )

        if (
            line.unit_price_cents is not None
            and line.unit_price_cents != entry.price_cents
        ):
            logger.warning(
                "cart.client_price_ignored",
                product_id=str(entry.product_id),
                client_price_cents=line.unit_price_cents,
                catalog_price_cents=entry.price_cents,
            )

        priced.append(
            PricedLineDTO(
                product_id=entry.product_id,
                name=render_display_name(entry.name, kept),
                size=entry.size,
                quantity=line.quantity,
                unit_price_cents=entry.price_cents,
            )
        )

    return PricedCartDTO(
        items=tuple(priced),
        total_cents=sum(item.subtotal_cents for item in priced),
    )
