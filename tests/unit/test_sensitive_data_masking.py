import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_invite_code_masked_in_free_text(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "invite_code=WELCOME2024"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "WELCOME2024" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_sensitive_keys_masked_whole(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "password": "hunter22", "refresh": "eyJ.abc"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["password"] == "***MASKED***"
        assert result["refresh"] == "***MASKED***"

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.created", "order_id": "0192-abc"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_id"] == "0192-abc"
        assert result["event"] == "order.created"
