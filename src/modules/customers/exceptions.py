"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CustomerAlreadyExists(Exception):
    """An account with the same email already exists."""


class CustomerNotFound(Exception):
    """The user has no customer profile, or it has been soft-deleted."""


class InactiveCustomer(Exception):
    """The customer profile has been deactivated by staff."""
