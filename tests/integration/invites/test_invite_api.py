"""Integration tests for the invite endpoints.

Covers:
- POST /api/v1/invites/validate/ (anonymous, throttled): verdict per reason.
- Staff tooling: list, create, activate / deactivate.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from modules.invites.models import Invite

pytestmark = pytest.mark.integration

VALIDATE_URL = "/api/v1/invites/validate/"


class TestValidateEndpoint:
    def test_redeemable(self, api_client, welcome_invite):
        response = api_client.post(VALIDATE_URL, {"code": "WELCOME2024"}, format="json")

        assert response.status_code == 200
        assert response.json() == {
            "code": "WELCOME2024",
            "redeemable": True,
            "reason": None,
            "remaining_uses": 100,
        }
        assert Invite.objects.get(code="WELCOME2024").uses == 0

    @pytest.mark.parametrize(
        ("fields", "code", "message"),
        [
            ({"active": False}, "invite_inactive", "This invite code is no longer active."),
            ({"max_uses": 1, "uses": 1}, "invite_exhausted", "This invite code has already been used."),
            (
                {"expires_at": datetime(2020, 1, 1, tzinfo=timezone.utc)},
                "invite_expired",
                "This invite code has expired.",
            ),
        ],
    )
    def test_failure_reasons(self, api_client, fields, code, message):
        Invite.objects.create(code="TESTCODE", **fields)

        response = api_client.post(VALIDATE_URL, {"code": "TESTCODE"}, format="json")

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == code
        assert error["detail"] == message

    def test_unknown(self, api_client):
        response = api_client.post(VALIDATE_URL, {"code": "NOPE-NOPE"}, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invite_not_found"

    def test_missing_code(self, api_client):
        response = api_client.post(VALIDATE_URL, {}, format="json")

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_is_throttled(self, api_client, welcome_invite):
        for _ in range(20):
            response = api_client.post(VALIDATE_URL, {"code": "WELCOME2024"}, format="json")
            assert response.status_code == 200

        response = api_client.post(VALIDATE_URL, {"code": "WELCOME2024"}, format="json")
        assert response.status_code == 429


class TestStaffTooling:
    def test_customers_cannot_list(self, customer_client):
        response = customer_client.get("/api/v1/invites/")
        assert response.status_code == 403

    def test_anonymous_cannot_create(self, api_client):
        response = api_client.post("/api/v1/invites/", {"code": "SPRING25"}, format="json")
        assert response.status_code == 401

    def test_list(self, staff_client, welcome_invite, single_use_invite):
        response = staff_client.get("/api/v1/invites/")

        assert response.status_code == 200
        codes = {row["code"] for row in response.json()["results"]}
        assert codes == {"WELCOME2024", "FRIEND-0001"}

    def test_list_filter_active(self, staff_client, welcome_invite, single_use_invite):
        single_use_invite.active = False
        single_use_invite.save()

        response = staff_client.get("/api/v1/invites/", {"active": "false"})

        assert [row["code"] for row in response.json()["results"]] == ["FRIEND-0001"]

    def test_create(self, staff_client):
        response = staff_client.post(
            "/api/v1/invites/",
            {
                "code": "SPRING25",
                "max_uses": 10,
                "issued_to_email": "",
                "expires_at": "2030-01-01T00:00:00Z",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["code"] == "SPRING25"
        assert data["remaining_uses"] == 10
        assert Invite.objects.get(code="SPRING25").max_uses == 10

    def test_create_duplicate(self, staff_client, welcome_invite):
        response = staff_client.post(
            "/api/v1/invites/", {"code": "WELCOME2024"}, format="json"
        )

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "invite_already_exists"

    @pytest.mark.parametrize("payload", [{"code": "AB"}, {"code": "SPRING25", "max_uses": 500}])
    def test_create_invalid(self, staff_client, payload):
        response = staff_client.post("/api/v1/invites/", payload, format="json")
        assert response.status_code == 400

    def test_deactivate_and_activate(self, staff_client, api_client, single_use_invite):
        response = staff_client.post("/api/v1/invites/FRIEND-0001/deactivate/")
        assert response.status_code == 200
        assert response.json()["active"] is False

        verdict = api_client.post(VALIDATE_URL, {"code": "FRIEND-0001"}, format="json")
        assert verdict.json()["errors"][0]["code"] == "invite_inactive"

        response = staff_client.post("/api/v1/invites/FRIEND-0001/activate/")
        assert response.json()["active"] is True

    def test_deactivate_unknown(self, staff_client):
        response = staff_client.post("/api/v1/invites/NOPE-NOPE/deactivate/")
        assert response.status_code == 404
