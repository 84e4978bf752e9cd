"""Python client for the Cachet status page REST API."""
from __future__ import annotations

from typing import Any

from .core import Meta, Pagination, QueryOptions, Response, add_options
from .errors import (
    APIError,
    AuthenticationError,
    CachetError,
    ConfigurationError,
    DecodeError,
    NotFoundError,
    QueryEncodingError,
    TransportError,
)
from .models import (
    CalculationType,
    CollapsedState,
    Component,
    ComponentGroup,
    GroupVisibility,
    Metric,
    MetricGroup,
    MetricView,
    MetricVisibility,
    Point,
)
from .services import (
    ComponentGroupResponse,
    ComponentGroupsQueryParams,
    MetricGroupResponse,
    MetricGroupsQueryParams,
    MetricQueryParams,
    MetricResponse,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "CachetError",
    "CachetSettings",
    "CalculationType",
    "Client",
    "CollapsedState",
    "Component",
    "ComponentGroup",
    "ComponentGroupResponse",
    "ComponentGroupsQueryParams",
    "ConfigurationError",
    "DecodeError",
    "GroupVisibility",
    "Meta",
    "Metric",
    "MetricGroup",
    "MetricGroupResponse",
    "MetricGroupsQueryParams",
    "MetricQueryParams",
    "MetricResponse",
    "MetricView",
    "MetricVisibility",
    "NotFoundError",
    "Pagination",
    "Point",
    "QueryEncodingError",
    "QueryOptions",
    "Response",
    "TransportError",
    "add_options",
    "load_settings",
]


def __getattr__(name: str) -> Any:
    if name == "Client":
        from .client import Client

        return Client
    if name in {"CachetSettings", "load_settings"}:
        from .settings import CachetSettings, load_settings

        return {"CachetSettings": CachetSettings, "load_settings": load_settings}[name]
    raise AttributeError(f"module 'cachet' has no attribute '{name}'")
