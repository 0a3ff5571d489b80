"""Tests for shared/exceptions.py."""

from shared.exceptions import TradedeskError, ExternalServiceError
from modules.subscribers.exceptions import SubscriberLookupError


class TestTradedeskError:
    def test_tradedesk_error_message(self):
        """TradedeskError should store message."""
        error = TradedeskError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_tradedesk_error_default_code(self):
        """TradedeskError should default code to class name."""
        error = TradedeskError("Test error")
        assert error.code == "TradedeskError"

    def test_tradedesk_error_custom_code(self):
        """TradedeskError should accept custom code."""
        error = TradedeskError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_tradedesk_error_default_details(self):
        """TradedeskError should default details to empty dict."""
        error = TradedeskError("Test error")
        assert error.details == {}

    def test_tradedesk_error_custom_details(self):
        """TradedeskError should accept custom details."""
        error = TradedeskError("Test error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_tradedesk_error_to_dict(self):
        """TradedeskError should convert to dict."""
        error = TradedeskError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_tradedesk_error_to_dict_minimal(self):
        """TradedeskError.to_dict should work with minimal args."""
        error = TradedeskError("Test error")
        result = error.to_dict()

        assert result["error"] == "TradedeskError"
        assert result["message"] == "Test error"
        assert result["details"] == {}


class TestExternalServiceError:
    def test_external_service_error_inherits_tradedesk_error(self):
        """ExternalServiceError should inherit from TradedeskError."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, TradedeskError)

    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert error.service == "supabase"

    def test_external_service_error_includes_service_in_details(self):
        """ExternalServiceError should include service in details."""
        error = ExternalServiceError("Connection failed", service="supabase")
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should preserve other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 500}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"
        assert result["details"]["status_code"] == 500

    def test_external_service_error_custom_code(self):
        """ExternalServiceError should keep an explicit error code."""
        error = ExternalServiceError(
            "Lookup failed",
            service="supabase",
            code="SUBSCRIBER_LOOKUP_FAILED",
        )
        assert error.to_dict()["error"] == "SUBSCRIBER_LOOKUP_FAILED"

    def test_details_not_shared_between_instances(self):
        """Adding the service key should not leak into other errors."""
        first = ExternalServiceError("a", service="supabase")
        second = TradedeskError("b")
        assert "service" in first.details
        assert second.details == {}

    def test_subscriber_lookup_error_is_external(self):
        """Directory failures share the 503 base."""
        error = SubscriberLookupError("is_admin", "timeout")
        assert isinstance(error, ExternalServiceError)
        assert error.details == {
            "service": "supabase",
            "operation": "is_admin",
            "reason": "timeout",
        }
