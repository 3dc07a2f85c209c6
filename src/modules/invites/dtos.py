"""Invite DTOs for the Service Layer.

Framework-agnostic, immutable Pydantic v2 models:

- ``CreateInviteDTO``: staff input for issuing a new code.
- ``InviteValidationResult``: outcome of a read-only redeemability check.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.invites.constants import (
    INVITE_CODE_MAX_LENGTH,
    INVITE_CODE_MIN_LENGTH,
    INVITE_MAX_USES_LIMIT,
)

INVITE_CODE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class CreateInviteDTO(BaseModel):
    """Immutable DTO for invite issuance.

    Codes are stored as given; matching is case-sensitive.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(
        min_length=INVITE_CODE_MIN_LENGTH, max_length=INVITE_CODE_MAX_LENGTH
    )
    max_uses: int = Field(default=1, ge=1, le=INVITE_MAX_USES_LIMIT)
    expires_at: Optional[datetime] = None
    issued_to_email: Optional[EmailStr] = None

    @field_validator("code")
    @classmethod
    def validate_code_charset(cls, v: str) -> str:
        if not INVITE_CODE_RE.match(v):
            raise ValueError(
                "Invite code may only contain letters, digits, '-' and '_'."
            )
        return v


class InviteValidationResult(BaseModel):
    """Read-only redeemability verdict returned to the signup form."""

    model_config = ConfigDict(frozen=True)

    code: str
    redeemable: bool
    reason: Optional[str] = None
    remaining_uses: int = 0
