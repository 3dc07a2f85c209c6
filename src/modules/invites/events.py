"""Domain events for the Invites bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class InviteRedeemed(DomainEvent):
    """Raised each time one use of an invite is consumed."""

    topic: ClassVar[str] = "invites"

    uses: int = 0
    max_uses: int = 0
