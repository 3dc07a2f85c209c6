"""Customer DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``RegisterCustomerDTO``: input for invite-gated signup.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from modules.invites.constants import INVITE_CODE_MAX_LENGTH, INVITE_CODE_MIN_LENGTH

PHONE_RE = re.compile(r"^\+?[\d\s().-]{7,20}$")


class RegisterCustomerDTO(BaseModel):
    """Immutable DTO for signup requests.

    Validates:
    - ``email`` is a well-formed address, normalised to lower case.
    - ``name`` is 1-100 characters after trimming.
    - ``phone`` (optional) looks like a phone number.
    - ``invite_code`` has a plausible length; redeemability is checked
      by the invite ledger, not here.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    email: EmailStr
    name: str = Field(min_length=1, max_length=100)
    phone: str = ""
    invite_code: str = Field(
        min_length=INVITE_CODE_MIN_LENGTH, max_length=INVITE_CODE_MAX_LENGTH
    )
    password: str = Field(min_length=8, repr=False)

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        if v and not PHONE_RE.match(v):
            raise ValueError("Invalid phone number.")
        return v
