"""Invite repository interface.

Extends ``IRepository[Invite]`` with the atomic consume primitive the
signup flow depends on.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.invites.models import Invite


class IInviteRepository(IRepository["Invite"]):
    """Repository contract for the Invite ledger."""

    @abstractmethod
    def get_by_code(self, code: str) -> Optional[Invite]:
        """Retrieve an invite by its exact (case-sensitive) code."""

    @abstractmethod
    def try_consume(self, code: str, now: datetime) -> bool:
        """Atomically take one use of a redeemable invite.

        Returns ``True`` if exactly one use was taken, ``False`` when the
        invite was missing or not redeemable at ``now``.
        """

    @abstractmethod
    def flush_events(self, entity: Invite) -> None:
        """Write the invite's pending domain events to the outbox."""

    @abstractmethod
    def set_active(self, code: str, active: bool) -> Optional[Invite]:
        """Flip the kill switch; returns ``None`` for unknown codes."""
