"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    StorefrontError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)


class TestStorefrontError:
    def test_storefront_error_message(self):
        """StorefrontError should store message."""
        error = StorefrontError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_storefront_error_default_code(self):
        """StorefrontError should default code to class name."""
        error = StorefrontError("Test error")
        assert error.code == "StorefrontError"

    def test_storefront_error_custom_code(self):
        """StorefrontError should accept custom code."""
        error = StorefrontError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_storefront_error_default_details(self):
        """StorefrontError should default details to empty dict."""
        error = StorefrontError("Test error")
        assert error.details == {}

    def test_storefront_error_to_dict(self):
        """StorefrontError should convert to dict."""
        error = StorefrontError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestSubclasses:
    @pytest.mark.parametrize(
        "error_class",
        [ValidationError, AuthenticationError, AuthorizationError, ConflictError],
    )
    def test_inherits_storefront_error(self, error_class):
        """Every category should be catchable as StorefrontError."""
        error = error_class("Something failed")
        assert isinstance(error, StorefrontError)
        assert error.code == error_class.__name__

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError(
            "Validation failed",
            details={"fields": {"company": "Please enter your company name"}}
        )
        assert error.details["fields"]["company"] == "Please enter your company name"


class TestExternalServiceError:
    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, StorefrontError)
        assert error.service == "supabase"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should include service alongside other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 503}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"
        assert result["details"]["status_code"] == 503
