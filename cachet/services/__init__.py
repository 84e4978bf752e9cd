"""Resource services, one per Cachet collection."""
from .component_groups import ComponentGroupResponse, ComponentGroupsQueryParams, ComponentGroupsService
from .metric_groups import MetricGroupResponse, MetricGroupsQueryParams, MetricGroupsService
from .metrics import MetricQueryParams, MetricResponse, MetricsService

__all__ = [
    "ComponentGroupResponse",
    "ComponentGroupsQueryParams",
    "ComponentGroupsService",
    "MetricGroupResponse",
    "MetricGroupsQueryParams",
    "MetricGroupsService",
    "MetricQueryParams",
    "MetricResponse",
    "MetricsService",
]
