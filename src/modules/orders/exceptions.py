"""Order domain exceptions.

Raised by the pricer and the Service Layer.  The API layer (Views)
catches these and translates them into HTTP responses.

Cart errors are expected, user-facing outcomes.  ``ConflictRetry`` is
transient and retried by the service before it surfaces.
``PriceMismatchInternal`` signals a defect and is never shown verbatim.
"""

from __future__ import annotations

from typing import Any, Optional


class CartError(Exception):
    """Base class for rejected carts."""

    code = "invalid_cart"

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        super().__init__(message)


class EmptyCart(CartError):
    """The cart has no lines."""

    code = "empty_cart"


class ProductNotFound(CartError):
    """A line references a product missing from the active catalog."""

    code = "product_not_found"


class InvalidQuantity(CartError):
    """A line quantity is below one."""

    code = "invalid_quantity"


class SizeMismatch(CartError):
    """A line's size differs from the catalog product's size."""

    code = "size_mismatch"


class MissingSelection(CartError):
    """A product needs a strain or flavor choice that the line lacks."""

    code = "missing_selection"


class PriceMismatchInternal(Exception):
    """Recomputed order total disagrees with the priced total."""


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidTransition(Exception):
    """The requested status is not reachable from the current one."""

    def __init__(self, order_id: Any, current_status: str, target_status: str) -> None:
        self.order_id = order_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Cannot transition order from '{current_status}' to '{target_status}'."
        )


class ConflictRetry(Exception):
    """Another writer changed the order status between read and write."""
