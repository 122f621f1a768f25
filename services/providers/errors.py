"""Error types for provider adapters and search validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for provider failures."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    PARSE = "parse"


@dataclass(frozen=True, slots=True)
class ProviderError:
    """
    Failure of one provider during a search.

    Attributes:
        code: Error code identifying the kind of failure.
        message: Human-readable error message.
        provider: Value of the provider that produced the error.
        details: Additional error details (optional).
    """

    code: ErrorCode
    message: str
    provider: str
    details: str | None = None

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"[{self.provider}] {self.code.value}: {self.message}"


class QueryValidationError(Exception):
    """A search query was rejected before any provider was called."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize error."""
        super().__init__(message)
        self.message = message
        self.field = field


class RecordParseError(Exception):
    """A single raw bus record could not be normalized."""


def NetworkError(
    provider: str,
    message: str = "Network error",
    details: str | None = None,
) -> ProviderError:
    """Create a network error."""
    return ProviderError(
        code=ErrorCode.NETWORK,
        message=message,
        provider=provider,
        details=details,
    )


def ParseError(
    provider: str,
    message: str = "Failed to parse response",
    details: str | None = None,
) -> ProviderError:
    """Create a parse error."""
    return ProviderError(
        code=ErrorCode.PARSE,
        message=message,
        provider=provider,
        details=details,
    )


def TimeoutFailure(
    provider: str,
    timeout: float,
) -> ProviderError:
    """Create a timeout error."""
    return ProviderError(
        code=ErrorCode.TIMEOUT,
        message="Search timed out",
        provider=provider,
        details=f"No response within {timeout:g}s",
    )
