"""Metric group endpoints (``api/v1/metrics/groups``)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core import API_PREFIX, Meta, QueryOptions, Response, Service, query_field
from ..models import MetricGroup


@dataclass
class MetricGroupResponse:
    meta: Meta = field(default_factory=Meta)
    metric_groups: List[MetricGroup] = field(default_factory=list)


@dataclass
class MetricGroupsQueryParams(QueryOptions):
    id: int = query_field("id")
    name: str = query_field("name", "")
    order: int = query_field("order")
    collapsed: bool = query_field("collapsed", False)
    visible: int = query_field("visible")


class MetricGroupsService(Service):
    path = f"{API_PREFIX}/metrics/groups"

    def get_all(self, filter: Optional[MetricGroupsQueryParams] = None) -> Tuple[MetricGroupResponse, Response]:
        envelope, resp = self._list(MetricGroup, filter)
        return MetricGroupResponse(meta=envelope.meta, metric_groups=envelope.data), resp

    def get(self, group_id: int) -> Tuple[MetricGroup, Response]:
        return self._one("GET", self._item_path(group_id), MetricGroup)

    def create(self, group: MetricGroup) -> Tuple[MetricGroup, Response]:
        return self._one("POST", self.path, MetricGroup, group)

    def update(self, group_id: int, group: MetricGroup) -> Tuple[MetricGroup, Response]:
        return self._one("PUT", self._item_path(group_id), MetricGroup, group)

    def delete(self, group_id: int) -> Response:
        return self._delete(self._item_path(group_id))
