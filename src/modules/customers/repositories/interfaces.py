"""Customer repository interface.

Extends ``IRepository[Customer]`` with the look-ups signup and
checkout need: unique email, and profile-by-auth-user.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Customer]:
        """Retrieve a customer by email, including soft-deleted profiles."""

    @abstractmethod
    def get_by_user_id(self, user_id: Any) -> Optional[Customer]:
        """Retrieve the live customer profile bound to an auth user."""
