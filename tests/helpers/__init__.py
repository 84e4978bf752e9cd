"""Shared helper utilities for the Cachet client test-suite."""

from .mocks import (
    FakeCachetServer,
    FakeHttpResponse,
    RecordedRequest,
    RecordingSession,
    connection_error,
)

__all__ = [
    "FakeCachetServer",
    "FakeHttpResponse",
    "RecordedRequest",
    "RecordingSession",
    "connection_error",
]
