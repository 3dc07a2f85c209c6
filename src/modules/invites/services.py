"""Invite service layer (Use Cases).

Validation is read-only and may race with consumption; only
``consume`` is authoritative.  A failed consume never mutates the
ledger.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.utils import timezone

from modules.invites.constants import (
    INVITE_CODE_MAX_LENGTH,
    INVITE_CODE_MIN_LENGTH,
    InviteFailureReason,
)
from modules.invites.dtos import InviteValidationResult
from modules.invites.events import InviteRedeemed
from modules.invites.exceptions import (
    InviteAlreadyExists,
    InviteError,
    InviteExhausted,
    InviteExpired,
    InviteInactive,
    InviteNotFound,
)
from modules.invites.models import Invite

if TYPE_CHECKING:
    from modules.invites.dtos import CreateInviteDTO
    from modules.invites.repositories.interfaces import IInviteRepository

logger = structlog.get_logger(__name__)

_ERRORS_BY_REASON: Dict[InviteFailureReason, type[InviteError]] = {
    InviteFailureReason.NOT_FOUND: InviteNotFound,
    InviteFailureReason.EXPIRED: InviteExpired,
    InviteFailureReason.EXHAUSTED: InviteExhausted,
    InviteFailureReason.INACTIVE: InviteInactive,
}


def is_well_formed(code: Any) -> bool:
    """Length check only; the character rule applies when staff create codes."""
    return (
        isinstance(code, str)
        and INVITE_CODE_MIN_LENGTH <= len(code) <= INVITE_CODE_MAX_LENGTH
    )


class InviteService:
    """Application service for the invite ledger."""

    def __init__(self, repository: IInviteRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def validate(
        self, code: str, now: Optional[datetime] = None
    ) -> InviteValidationResult:
        """Check whether ``code`` could be redeemed right now, without mutating.

        Raises:
            InviteNotFound, InviteExpired, InviteExhausted, InviteInactive:
                first failing condition, in that order.
        """
        now = now or timezone.now()
        invite, reason = self._inspect(code, now)
        if reason is not None:
            logger.info("invite.validation_failed", reason=reason.value)
            raise _ERRORS_BY_REASON[reason](code if isinstance(code, str) else "")
        return InviteValidationResult(
            code=code, redeemable=True, remaining_uses=invite.remaining_uses
        )

    def get_invite(self, code: str) -> Invite:
        invite = self._repo.get_by_code(code) if is_well_formed(code) else None
        if invite is None:
            raise InviteNotFound(code)
        return invite

    def list_invites(self, filters: Optional[Dict[str, Any]] = None) -> List[Invite]:
        return self._repo.list(filters)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def consume(self, code: str, now: Optional[datetime] = None) -> Invite:
        """Take exactly one use of ``code``.

        Runs inside the caller's transaction when there is one, so a
        failure later in the same unit of work gives the use back.

        Raises:
            InviteNotFound, InviteExpired, InviteExhausted, InviteInactive:
                the invite was not redeemable; nothing was changed.
        """
        now = now or timezone.now()
        if not is_well_formed(code) or not self._repo.try_consume(code, now):
            raise self._classify_failure(code, now)

        invite = self._repo.get_by_code(code)
        invite.add_domain_event(
            InviteRedeemed(
                aggregate_id=invite.code,
                uses=invite.uses,
                max_uses=invite.max_uses,
            )
        )
        self._repo.flush_events(invite)
        logger.info(
            "invite.consumed",
            uses=invite.uses,
            max_uses=invite.max_uses,
        )
        return invite

    @transaction.atomic
    def create_invite(self, dto: CreateInviteDTO) -> Invite:
        """Issue a new invite code.

        Raises:
            InviteAlreadyExists: the code is already taken.
        """
        if self._repo.get_by_code(dto.code) is not None:
            raise InviteAlreadyExists(f"Invite code {dto.code!r} already exists.")
        invite = Invite(
            code=dto.code,
            max_uses=dto.max_uses,
            expires_at=dto.expires_at,
            issued_to_email=dto.issued_to_email or "",
        )
        self._repo.save(invite)
        logger.info("invite.created", max_uses=invite.max_uses)
        return invite

    def set_active(self, code: str, active: bool) -> Invite:
        invite = self._repo.set_active(code, active) if is_well_formed(code) else None
        if invite is None:
            raise InviteNotFound(code)
        logger.info("invite.active_changed", active=active)
        return invite

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _inspect(
        self, code: str, now: datetime
    ) -> tuple[Optional[Invite], Optional[InviteFailureReason]]:
        invite = self._repo.get_by_code(code) if is_well_formed(code) else None
        if invite is None:
            return None, InviteFailureReason.NOT_FOUND
        return invite, invite.failure_reason(now)

    def _classify_failure(self, code: str, now: datetime) -> InviteError:
        _, reason = self._inspect(code, now)
        # The conditional update missed but a re-read looks redeemable:
        # a concurrent consumer took the last use between the two reads.
        if reason is None:
            reason = InviteFailureReason.EXHAUSTED
        logger.info("invite.consume_rejected", reason=reason.value)
        return _ERRORS_BY_REASON[reason](code if isinstance(code, str) else "")
