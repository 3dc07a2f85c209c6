"""Invite model.

An invite gates account registration behind a finite-use, optionally
time-bounded code.

Invariants:
- ``uses <= max_uses`` always (database check constraint).
- ``uses`` only ever grows, and only through the conditional update in
  ``InviteDjangoRepository.try_consume``.
- Redeemable iff ``active and uses < max_uses and (no expiry or now < expires_at)``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from modules.invites.constants import (
    INVITE_CODE_MAX_LENGTH,
    INVITE_CODE_MIN_LENGTH,
    InviteFailureReason,
)
from shared.domain.events import DomainEventMixin


class Invite(DomainEventMixin, models.Model):
    """Invite keyed by its case-sensitive ``code``."""

    code = models.CharField(
        primary_key=True,
        max_length=INVITE_CODE_MAX_LENGTH,
        validators=[MinLengthValidator(INVITE_CODE_MIN_LENGTH)],
    )
    issued_to_email = models.EmailField(blank=True, default="")
    max_uses = models.PositiveIntegerField(
        default=1, validators=[MinValueValidator(1)]
    )
    uses = models.PositiveIntegerField(default=0)
    expires_at = models.DateTimeField(null=True, blank=True, default=None)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "invites"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                check=models.Q(uses__lte=models.F("max_uses")),
                name="invites_uses_within_max",
            ),
            models.CheckConstraint(
                check=models.Q(max_uses__gte=1),
                name="invites_max_uses_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Redeemability
    # ------------------------------------------------------------------

    @property
    def remaining_uses(self) -> int:
        return max(self.max_uses - self.uses, 0)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or timezone.now()) >= self.expires_at

    def failure_reason(
        self, now: Optional[datetime] = None
    ) -> Optional[InviteFailureReason]:
        """First reason the invite cannot be redeemed, or ``None``.

        Expiry is reported before exhaustion, and exhaustion before the
        kill switch.
        """
        if self.is_expired(now):
            return InviteFailureReason.EXPIRED
        if self.uses >= self.max_uses:
            return InviteFailureReason.EXHAUSTED
        if not self.active:
            return InviteFailureReason.INACTIVE
        return None

    def is_redeemable(self, now: Optional[datetime] = None) -> bool:
        return self.failure_reason(now) is None

    def __str__(self) -> str:
        return f"{self.code} ({self.uses}/{self.max_uses})"
