"""Invite domain exceptions.

Raised by ``InviteService`` on validation and consumption.  Every
redemption failure carries a machine ``code`` and a customer-facing
``message`` so the signup form can tell expired from used-up codes.
"""

from __future__ import annotations

from modules.invites.constants import InviteFailureReason


class InviteError(Exception):
    """Base class for invite redemption failures."""

    reason: InviteFailureReason

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.invite_code = code
        super().__init__(detail or f"Invite {code!r}: {self.reason.label}")

    @property
    def code(self) -> str:
        return self.reason.value

    @property
    def message(self) -> str:
        return self.reason.label


class InviteNotFound(InviteError):
    """No invite matches the code (or the code is malformed)."""

    reason = InviteFailureReason.NOT_FOUND


class InviteExpired(InviteError):
    """The invite's ``expires_at`` is in the past."""

    reason = InviteFailureReason.EXPIRED


class InviteExhausted(InviteError):
    """Every use of the invite has been redeemed."""

    reason = InviteFailureReason.EXHAUSTED


class InviteInactive(InviteError):
    """Staff switched the invite off."""

    reason = InviteFailureReason.INACTIVE


class InviteAlreadyExists(Exception):
    """An invite with the same code already exists."""
