from __future__ import annotations

import pytest
from pydantic import ValidationError

from modules.invites.dtos import CreateInviteDTO

pytestmark = pytest.mark.unit


class TestCreateInviteDTO:
    def test_valid(self):
        dto = CreateInviteDTO(code="SPRING_25", max_uses=10)
        assert dto.code == "SPRING_25"
        assert dto.expires_at is None
        assert dto.issued_to_email is None

    @pytest.mark.parametrize("code", ["ABC", "A" * 21, "has space", "emoji🍵ok"])
    def test_rejects_bad_codes(self, code):
        with pytest.raises(ValidationError):
            CreateInviteDTO(code=code)

    @pytest.mark.parametrize("max_uses", [0, 101])
    def test_max_uses_bounds(self, max_uses):
        with pytest.raises(ValidationError):
            CreateInviteDTO(code="SPRING25", max_uses=max_uses)

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            CreateInviteDTO(code="SPRING25", issued_to_email="not-an-email")

    def test_is_frozen(self):
        dto = CreateInviteDTO(code="SPRING25")
        with pytest.raises(ValidationError):
            dto.max_uses = 5
