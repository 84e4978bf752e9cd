"""Component group endpoints (``api/v1/components/groups``)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core import API_PREFIX, Meta, QueryOptions, Response, Service, query_field
from ..models import ComponentGroup


@dataclass
class ComponentGroupResponse:
    """One page of component groups plus its pagination block."""

    meta: Meta = field(default_factory=Meta)
    component_groups: List[ComponentGroup] = field(default_factory=list)


@dataclass
class ComponentGroupsQueryParams(QueryOptions):
    id: int = query_field("id")
    name: str = query_field("name", "")
    order: int = query_field("order")
    collapsed: bool = query_field("collapsed", False)
    visible: int = query_field("visible")


class ComponentGroupsService(Service):
    path = f"{API_PREFIX}/components/groups"

    def get_all(
        self, filter: Optional[ComponentGroupsQueryParams] = None
    ) -> Tuple[ComponentGroupResponse, Response]:
        """Return all component groups matching ``filter``.

        Docs: https://docs.cachethq.io/reference#get-componentgroups
        """
        envelope, resp = self._list(ComponentGroup, filter)
        return ComponentGroupResponse(meta=envelope.meta, component_groups=envelope.data), resp

    def get(self, group_id: int) -> Tuple[ComponentGroup, Response]:
        """Docs: https://docs.cachethq.io/reference#get-a-component-group"""
        return self._one("GET", self._item_path(group_id), ComponentGroup)

    def create(self, group: ComponentGroup) -> Tuple[ComponentGroup, Response]:
        """Docs: https://docs.cachethq.io/reference#post-componentgroups"""
        return self._one("POST", self.path, ComponentGroup, group)

    def update(self, group_id: int, group: ComponentGroup) -> Tuple[ComponentGroup, Response]:
        """Docs: https://docs.cachethq.io/reference#put-component-group"""
        return self._one("PUT", self._item_path(group_id), ComponentGroup, group)

    def delete(self, group_id: int) -> Response:
        """Docs: https://docs.cachethq.io/reference#delete-component-group"""
        return self._delete(self._item_path(group_id))
