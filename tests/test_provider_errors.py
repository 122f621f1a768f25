"""Tests for provider error types."""

from __future__ import annotations

import pytest

from services.providers.errors import (
    ErrorCode,
    NetworkError,
    ParseError,
    ProviderError,
    QueryValidationError,
    RecordParseError,
    TimeoutFailure,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_values(self) -> None:
        """ErrorCode should have the three failure kinds."""
        assert {code.value for code in ErrorCode} == {"timeout", "network", "parse"}


class TestProviderError:
    """Tests for ProviderError."""

    def test_str_includes_provider_and_code(self) -> None:
        """__str__ should name provider, code and message."""
        error = ProviderError(code=ErrorCode.PARSE, message="Bad body", provider="goibibo")

        assert str(error) == "[goibibo] parse: Bad body"

    def test_is_frozen(self) -> None:
        """ProviderError should be immutable."""
        error = ProviderError(code=ErrorCode.NETWORK, message="x", provider="paytm")

        with pytest.raises(AttributeError):
            error.message = "y"  # type: ignore[misc]


class TestErrorFactories:
    """Tests for error factory functions."""

    def test_network_error(self) -> None:
        """NetworkError should build a NETWORK ProviderError."""
        error = NetworkError(provider="abhibus", message="Request failed", details="refused")

        assert error.code == ErrorCode.NETWORK
        assert error.provider == "abhibus"
        assert error.details == "refused"

    def test_network_error_default_message(self) -> None:
        """NetworkError should have a default message."""
        assert NetworkError(provider="abhibus").message == "Network error"

    def test_parse_error(self) -> None:
        """ParseError should build a PARSE ProviderError."""
        error = ParseError(provider="paytm")

        assert error.code == ErrorCode.PARSE
        assert error.message == "Failed to parse response"

    def test_timeout_failure(self) -> None:
        """TimeoutFailure should report the timeout in its details."""
        error = TimeoutFailure(provider="makemytrip", timeout=15.0)

        assert error.code == ErrorCode.TIMEOUT
        assert error.message == "Search timed out"
        assert error.details == "No response within 15s"


class TestQueryValidationError:
    """Tests for QueryValidationError."""

    def test_carries_message_and_field(self) -> None:
        """QueryValidationError should expose message and field."""
        error = QueryValidationError("source is required", field="source")

        assert error.message == "source is required"
        assert error.field == "source"
        assert str(error) == "source is required"

    def test_field_is_optional(self) -> None:
        """field should default to None."""
        assert QueryValidationError("bad").field is None


class TestRecordParseError:
    """Tests for RecordParseError."""

    def test_is_exception(self) -> None:
        """RecordParseError should be raisable."""
        with pytest.raises(RecordParseError, match="Missing operator"):
            raise RecordParseError("Missing operator name")
