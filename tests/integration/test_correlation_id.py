import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_echoes_supplied_request_id(self, client):
        response = client.get("/health", HTTP_X_REQUEST_ID="checkout-retry.42")

        assert response["X-Request-ID"] == "checkout-retry.42"

    def test_generates_uuid_when_missing(self, client):
        request_id = client.get("/health")["X-Request-ID"]

        assert str(uuid.UUID(request_id, version=4)) == request_id

    @pytest.mark.parametrize(
        "supplied",
        ["x" * 129, "has spaces in it", "line\\nbreak", "<script>"],
    )
    def test_replaces_malformed_request_id(self, client, supplied):
        request_id = client.get("/health", HTTP_X_REQUEST_ID=supplied)["X-Request-ID"]

        assert request_id != supplied
        uuid.UUID(request_id, version=4)

    def test_request_id_reaches_log_lines(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID="log-test-correlation-456")

        messages = [record.getMessage() for record in caplog.records]
        assert any("log-test-correlation-456" in message for message in messages), messages

    def test_api_responses_carry_request_id(self, api_client_with_correlation):
        api_client, cid = api_client_with_correlation

        response = api_client.post(
            "/api/v1/invites/validate/", {"code": "NOPE-NOPE"}, format="json"
        )

        assert response["X-Request-ID"] == cid
