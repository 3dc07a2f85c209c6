"""Invite ledger constants."""

from django.db import models

INVITE_CODE_MIN_LENGTH = 6
INVITE_CODE_MAX_LENGTH = 20

# Staff tooling ceiling for a single code.
INVITE_MAX_USES_LIMIT = 100


class InviteFailureReason(models.TextChoices):
    NOT_FOUND = "invite_not_found", "Invalid invite code."
    EXPIRED = "invite_expired", "This invite code has expired."
    EXHAUSTED = "invite_exhausted", "This invite code has already been used."
    INACTIVE = "invite_inactive", "This invite code is no longer active."
