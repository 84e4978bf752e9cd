"""Component group service against the in-memory Cachet server."""

from __future__ import annotations

import pytest

from tests.conftest import get_test_logger

from cachet.errors import AuthenticationError, NotFoundError, QueryEncodingError
from cachet.models import CollapsedState, ComponentGroup, GroupVisibility
from cachet.services import ComponentGroupResponse, ComponentGroupsQueryParams

logger = get_test_logger(__name__)
logger.info("Starting tests for component groups")


def test_create_then_get_round_trips_caller_fields(client, cachet_server) -> None:
    """Create returns the server entity and Get reads the same fields back."""
    logger.info("Running component group create/get test")
    group = ComponentGroup(
        name="Backend",
        order=2,
        collapsed=CollapsedState.COLLAPSED_IF_OPERATIONAL,
        visible=GroupVisibility.PUBLIC,
    )
    created, resp = client.component_groups.create(group)
    assert resp.status_code == 200
    assert created.id > 0
    assert created.created_at

    sent = cachet_server.last
    assert sent.method == "POST"
    assert sent.path == "/api/v1/components/groups"
    assert sent.body == {"name": "Backend", "order": 2, "collapsed": 1, "visible": 1}

    fetched, _ = client.component_groups.get(created.id)
    assert cachet_server.last.path == f"/api/v1/components/groups/{created.id}"
    assert (fetched.name, fetched.order, fetched.collapsed, fetched.visible) == (
        "Backend",
        2,
        CollapsedState.COLLAPSED_IF_OPERATIONAL,
        GroupVisibility.PUBLIC,
    )
    assert fetched.enabled_components == []


def test_collapsed_zero_is_still_sent(client, cachet_server) -> None:
    client.component_groups.create(ComponentGroup(name="Edge"))
    assert cachet_server.last.body == {"name": "Edge", "collapsed": 0}


def test_update_then_get_reflects_change(client, cachet_server) -> None:
    created, _ = client.component_groups.create(ComponentGroup(name="Old"))
    updated, _ = client.component_groups.update(
        created.id, ComponentGroup(name="New", collapsed=CollapsedState.ALWAYS_COLLAPSED)
    )
    assert cachet_server.last.method == "PUT"
    assert updated.name == "New"

    fetched, _ = client.component_groups.get(created.id)
    assert fetched.name == "New"
    assert fetched.collapsed is CollapsedState.ALWAYS_COLLAPSED


def test_delete_then_get_is_not_found(client, cachet_server) -> None:
    created, _ = client.component_groups.create(ComponentGroup(name="Temp"))
    resp = client.component_groups.delete(created.id)
    assert resp.status_code == 204
    assert cachet_server.last.method == "DELETE"

    with pytest.raises(NotFoundError):
        client.component_groups.get(created.id)


def test_get_all_with_and_without_filter(client, cachet_server) -> None:
    for name in ("Web", "Database", "Web"):
        client.component_groups.create(ComponentGroup(name=name))

    everything, _ = client.component_groups.get_all()
    assert isinstance(everything, ComponentGroupResponse)
    assert len(everything.component_groups) == 3
    assert everything.meta.pagination.total == 3
    assert cachet_server.last.query == []

    web, _ = client.component_groups.get_all(ComponentGroupsQueryParams(name="Web"))
    assert cachet_server.last.query == [("name", "Web")]
    assert [group.name for group in web.component_groups] == ["Web", "Web"]


def test_get_all_rejects_bad_filter_before_sending(client, cachet_server) -> None:
    with pytest.raises(QueryEncodingError):
        client.component_groups.get_all("name=Web")  # type: ignore[arg-type]
    assert cachet_server.requests == []


def test_writes_without_token_are_rejected(cachet_server) -> None:
    from cachet.client import Client

    anonymous = Client("https://status.example.com", session=cachet_server)
    with pytest.raises(AuthenticationError):
        anonymous.component_groups.create(ComponentGroup(name="Nope"))
