"""Metric endpoints (``api/v1/metrics``) and their points."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..core import API_PREFIX, Meta, QueryOptions, Response, Service, list_decoder
from ..models import Metric, Number, Point

Timestamp = Union[str, int]


@dataclass
class MetricResponse:
    meta: Meta = field(default_factory=Meta)
    metrics: List[Metric] = field(default_factory=list)


@dataclass
class MetricQueryParams(QueryOptions):
    """Metrics only accept the shared pagination and sorting options."""


class MetricsService(Service):
    path = f"{API_PREFIX}/metrics"

    def get_all(self, filter: Optional[MetricQueryParams] = None) -> Tuple[MetricResponse, Response]:
        """Return all metrics that have been set up.

        Docs: https://docs.cachethq.io/reference#get-metrics
        """
        envelope, resp = self._list(Metric, filter)
        return MetricResponse(meta=envelope.meta, metrics=envelope.data), resp

    def get(self, metric_id: int) -> Tuple[Metric, Response]:
        """Return a single metric, without its points."""
        return self._one("GET", self._item_path(metric_id), Metric)

    def create(self, metric: Metric) -> Tuple[Metric, Response]:
        return self._one("POST", self.path, Metric, metric)

    def update(self, metric_id: int, metric: Metric) -> Tuple[Metric, Response]:
        # not listed in the API reference, but the endpoint exists
        return self._one("PUT", self._item_path(metric_id), Metric, metric)

    def delete(self, metric_id: int) -> Response:
        return self._delete(self._item_path(metric_id))

    def _points_path(self, metric_id: int) -> str:
        return f"{self._item_path(metric_id)}/points"

    def get_points(self, metric_id: int) -> Tuple[List[Point], Response]:
        """Docs: https://docs.cachethq.io/reference#get-metric-points"""
        envelope, resp = self.client.call("GET", self._points_path(metric_id), decode=list_decoder(Point))
        return envelope.data, resp

    def add_point(self, metric_id: int, value: Number, timestamp: Timestamp) -> Tuple[Point, Response]:
        """Record ``value`` for the metric at ``timestamp``.

        Both keys are always sent; Cachet assigns the id, counter and
        calculated value of the new point.
        """
        payload = {"value": value, "timestamp": timestamp}
        return self._one("POST", self._points_path(metric_id), Point, payload)

    def delete_point(self, metric_id: int, point_id: int) -> Response:
        return self._delete(f"{self._points_path(metric_id)}/{int(point_id)}")
