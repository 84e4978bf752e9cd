from __future__ import annotations

from typing import Optional

import typer

from cachet.models import CollapsedState, ComponentGroup, GroupVisibility
from cachet.services.component_groups import ComponentGroupsQueryParams

from ..common import (
    api_errors,
    client_from_context,
    console,
    print_record,
    reject_hidden_visibility,
    render_table,
)

component_groups_app = typer.Typer(help="Component group commands")

_COLUMNS = ("id", "name", "order", "collapsed", "visible", "lowest_human_status")


@component_groups_app.command("list")
def list_groups(
    ctx: typer.Context,
    name: str = typer.Option("", help="Only groups with this name"),
    visible: Optional[int] = typer.Option(None, min=0, max=1),
    page: int = typer.Option(0, min=0),
    per_page: int = typer.Option(0, "--per-page", min=0),
    sort: str = typer.Option("", help="Field to sort by"),
    sort_order: str = typer.Option("", "--sort-order", help="asc or desc"),
) -> None:
    query = ComponentGroupsQueryParams(
        name=name,
        visible=visible or 0,
        page=page,
        per_page=per_page,
        sort_field=sort,
        sort_order=sort_order,
    )
    with api_errors():
        result, _ = client_from_context(ctx).component_groups.get_all(query)
    render_table("Component groups", result.component_groups, _COLUMNS, result.meta)


@component_groups_app.command("get")
def get_group(ctx: typer.Context, group_id: int = typer.Argument(...)) -> None:
    with api_errors():
        group, _ = client_from_context(ctx).component_groups.get(group_id)
    print_record(group)


@component_groups_app.command("create")
def create_group(
    ctx: typer.Context,
    name: str = typer.Option(..., help="Group name"),
    order: int = typer.Option(0),
    collapsed: int = typer.Option(0, min=0, max=2, help="0 expanded, 1 collapsed if operational, 2 always"),
    visible: int = typer.Option(1, min=0, max=1, help="0 logged-in users only, 1 public"),
) -> None:
    group = ComponentGroup(
        name=name,
        order=order,
        collapsed=CollapsedState(collapsed),
        visible=GroupVisibility(visible),
    )
    with api_errors():
        created, _ = client_from_context(ctx).component_groups.create(group)
    console().print(f"[green]Created component group {created.id}[/]")
    print_record(created)


@component_groups_app.command("update")
def update_group(
    ctx: typer.Context,
    group_id: int = typer.Argument(...),
    name: Optional[str] = typer.Option(None),
    order: Optional[int] = typer.Option(None),
    collapsed: Optional[int] = typer.Option(None, min=0, max=2),
    visible: Optional[int] = typer.Option(
        None, min=0, max=1, help="1 public (0 is refused: zero visibility is never sent)"
    ),
) -> None:
    reject_hidden_visibility(visible)
    with api_errors():
        service = client_from_context(ctx).component_groups
        current, _ = service.get(group_id)
        # only writable fields go back to the server
        group = ComponentGroup(
            name=current.name if name is None else name,
            order=current.order if order is None else order,
            collapsed=current.collapsed if collapsed is None else CollapsedState(collapsed),
            visible=current.visible if visible is None else GroupVisibility(visible),
        )
        updated, _ = service.update(group_id, group)
    print_record(updated)


@component_groups_app.command("delete")
def delete_group(ctx: typer.Context, group_id: int = typer.Argument(...)) -> None:
    with api_errors():
        client_from_context(ctx).component_groups.delete(group_id)
    console().print(f"[green]Deleted component group {group_id}[/]")
