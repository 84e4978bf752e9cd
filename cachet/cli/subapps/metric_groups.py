from __future__ import annotations

from typing import Optional

import typer

from cachet.models import GroupVisibility, MetricGroup
from cachet.services.metric_groups import MetricGroupsQueryParams

from ..common import (
    api_errors,
    client_from_context,
    console,
    print_record,
    reject_hidden_visibility,
    render_table,
)

metric_groups_app = typer.Typer(help="Metric group commands")

_COLUMNS = ("id", "name", "order", "visible", "updated_at")


@metric_groups_app.command("list")
def list_groups(
    ctx: typer.Context,
    name: str = typer.Option("", help="Only groups with this name"),
    visible: Optional[int] = typer.Option(None, min=0, max=1),
    page: int = typer.Option(0, min=0),
    per_page: int = typer.Option(0, "--per-page", min=0),
    sort: str = typer.Option(""),
    sort_order: str = typer.Option("", "--sort-order"),
) -> None:
    query = MetricGroupsQueryParams(
        name=name,
        visible=visible or 0,
        page=page,
        per_page=per_page,
        sort_field=sort,
        sort_order=sort_order,
    )
    with api_errors():
        result, _ = client_from_context(ctx).metric_groups.get_all(query)
    render_table("Metric groups", result.metric_groups, _COLUMNS, result.meta)


@metric_groups_app.command("get")
def get_group(ctx: typer.Context, group_id: int = typer.Argument(...)) -> None:
    with api_errors():
        group, _ = client_from_context(ctx).metric_groups.get(group_id)
    print_record(group)


@metric_groups_app.command("create")
def create_group(
    ctx: typer.Context,
    name: str = typer.Option(...),
    order: int = typer.Option(0),
    visible: int = typer.Option(1, min=0, max=1),
) -> None:
    group = MetricGroup(name=name, order=order, visible=GroupVisibility(visible))
    with api_errors():
        created, _ = client_from_context(ctx).metric_groups.create(group)
    console().print(f"[green]Created metric group {created.id}[/]")
    print_record(created)


@metric_groups_app.command("update")
def update_group(
    ctx: typer.Context,
    group_id: int = typer.Argument(...),
    name: Optional[str] = typer.Option(None),
    order: Optional[int] = typer.Option(None),
    visible: Optional[int] = typer.Option(
        None, min=0, max=1, help="1 public (0 is refused: zero visibility is never sent)"
    ),
) -> None:
    reject_hidden_visibility(visible)
    with api_errors():
        service = client_from_context(ctx).metric_groups
        current, _ = service.get(group_id)
        group = MetricGroup(
            name=current.name if name is None else name,
            order=current.order if order is None else order,
            visible=current.visible if visible is None else GroupVisibility(visible),
        )
        updated, _ = service.update(group_id, group)
    print_record(updated)


@metric_groups_app.command("delete")
def delete_group(ctx: typer.Context, group_id: int = typer.Argument(...)) -> None:
    with api_errors():
        client_from_context(ctx).metric_groups.delete(group_id)
    console().print(f"[green]Deleted metric group {group_id}[/]")
