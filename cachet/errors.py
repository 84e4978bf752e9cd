"""Exceptions raised by the Cachet client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .core import Response


class CachetError(RuntimeError):
    """Base class for every error raised by this package."""


class ConfigurationError(CachetError):
    """Raised when the client configuration is missing or invalid."""


class QueryEncodingError(CachetError, ValueError):
    """Raised when a filter cannot be turned into a query string."""


class TransportError(CachetError):
    """Raised when the request could not be sent or no response arrived."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        super().__init__(f"{method} {url} failed: {reason}")
        self.method = method
        self.url = url
        self.reason = reason


class DecodeError(CachetError):
    """Raised when a response body does not match the expected envelope."""

    def __init__(self, url: str, reason: str, response: Optional["Response"] = None) -> None:
        super().__init__(f"Unable to decode response from {url}: {reason}")
        self.url = url
        self.reason = reason
        self.response = response


class APIError(CachetError):
    """Raised when Cachet answers with a non-success status code."""

    def __init__(self, status: Optional[int], detail: str, response: Optional["Response"] = None) -> None:
        message = f"Cachet API responded with status {status}{detail}"
        super().__init__(message)
        self.status = status
        self.detail = detail
        self.response = response


class AuthenticationError(APIError):
    """Raised for 401/403 answers."""


class NotFoundError(APIError):
    """Raised for 404 answers."""


__all__ = [
    "APIError",
    "AuthenticationError",
    "CachetError",
    "ConfigurationError",
    "DecodeError",
    "NotFoundError",
    "QueryEncodingError",
    "TransportError",
]
