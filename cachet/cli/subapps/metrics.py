from __future__ import annotations

import time
from typing import Optional

import typer

from cachet.models import CalculationType, Metric, MetricView, MetricVisibility
from cachet.services.metrics import MetricQueryParams

from ..common import api_errors, client_from_context, console, print_record, render_table

metrics_app = typer.Typer(help="Metric and metric point commands")

_COLUMNS = ("id", "name", "suffix", "calc_type", "default_view", "visible", "group_id")
_POINT_COLUMNS = ("id", "value", "calculated_value", "counter", "created_at")


@metrics_app.command("list")
def list_metrics(
    ctx: typer.Context,
    page: int = typer.Option(0, min=0),
    per_page: int = typer.Option(0, "--per-page", min=0),
    sort: str = typer.Option(""),
    sort_order: str = typer.Option("", "--sort-order"),
) -> None:
    query = MetricQueryParams(page=page, per_page=per_page, sort_field=sort, sort_order=sort_order)
    with api_errors():
        result, _ = client_from_context(ctx).metrics.get_all(query)
    render_table("Metrics", result.metrics, _COLUMNS, result.meta)


@metrics_app.command("get")
def get_metric(ctx: typer.Context, metric_id: int = typer.Argument(...)) -> None:
    with api_errors():
        metric, _ = client_from_context(ctx).metrics.get(metric_id)
    print_record(metric)


@metrics_app.command("create")
def create_metric(
    ctx: typer.Context,
    name: str = typer.Option(...),
    suffix: str = typer.Option("", help="Unit shown next to values"),
    description: str = typer.Option(""),
    default_value: int = typer.Option(0, "--default-value"),
    calc_type: int = typer.Option(0, "--calc-type", min=0, max=1, help="0 sum, 1 average"),
    display_chart: bool = typer.Option(True, "--display-chart/--no-display-chart"),
    places: int = typer.Option(2, min=0),
    default_view: int = typer.Option(1, "--default-view", min=0, max=3, help="0 hour, 1 12 hours, 2 week, 3 month"),
    threshold: int = typer.Option(5, min=0),
    order: int = typer.Option(0),
    visible: int = typer.Option(1, min=0, max=2, help="0 logged-in, 1 public, 2 hidden"),
    group_id: int = typer.Option(0, "--group-id"),
) -> None:
    metric = Metric(
        name=name,
        suffix=suffix,
        description=description,
        default_value=default_value,
        calc_type=CalculationType(calc_type),
        display_chart=display_chart,
        places=places,
        default_view=MetricView(default_view),
        threshold=threshold,
        order=order,
        visible=MetricVisibility(visible),
        group_id=group_id,
    )
    with api_errors():
        created, _ = client_from_context(ctx).metrics.create(metric)
    console().print(f"[green]Created metric {created.id}[/]")
    print_record(created)


@metrics_app.command("update")
def update_metric(
    ctx: typer.Context,
    metric_id: int = typer.Argument(...),
    name: Optional[str] = typer.Option(None),
    suffix: Optional[str] = typer.Option(None),
    description: Optional[str] = typer.Option(None),
    calc_type: Optional[int] = typer.Option(None, "--calc-type", min=0, max=1),
    default_view: Optional[int] = typer.Option(None, "--default-view", min=0, max=3),
    visible: Optional[int] = typer.Option(None, min=0, max=2),
    group_id: Optional[int] = typer.Option(None, "--group-id"),
) -> None:
    with api_errors():
        service = client_from_context(ctx).metrics
        current, _ = service.get(metric_id)
        metric = Metric(
            name=current.name if name is None else name,
            suffix=current.suffix if suffix is None else suffix,
            description=current.description if description is None else description,
            default_value=current.default_value,
            calc_type=current.calc_type if calc_type is None else CalculationType(calc_type),
            display_chart=current.display_chart,
            places=current.places,
            default_view=current.default_view if default_view is None else MetricView(default_view),
            threshold=current.threshold,
            order=current.order,
            visible=current.visible if visible is None else MetricVisibility(visible),
            group_id=current.group_id if group_id is None else group_id,
        )
        updated, _ = service.update(metric_id, metric)
    print_record(updated)


@metrics_app.command("delete")
def delete_metric(ctx: typer.Context, metric_id: int = typer.Argument(...)) -> None:
    with api_errors():
        client_from_context(ctx).metrics.delete(metric_id)
    console().print(f"[green]Deleted metric {metric_id}[/]")


@metrics_app.command("points")
def list_points(ctx: typer.Context, metric_id: int = typer.Argument(...)) -> None:
    with api_errors():
        points, _ = client_from_context(ctx).metrics.get_points(metric_id)
    render_table(f"Points of metric {metric_id}", points, _POINT_COLUMNS)


@metrics_app.command("add-point")
def add_point(
    ctx: typer.Context,
    metric_id: int = typer.Argument(...),
    value: float = typer.Argument(...),
    timestamp: Optional[str] = typer.Option(None, help="Unix time or ISO-8601; defaults to now"),
) -> None:
    stamp = timestamp if timestamp else int(time.time())
    number = int(value) if value.is_integer() else value
    with api_errors():
        point, _ = client_from_context(ctx).metrics.add_point(metric_id, number, stamp)
    console().print(f"[green]Added point {point.id} to metric {metric_id}[/]")
    print_record(point)


@metrics_app.command("delete-point")
def delete_point(
    ctx: typer.Context,
    metric_id: int = typer.Argument(...),
    point_id: int = typer.Argument(...),
) -> None:
    with api_errors():
        client_from_context(ctx).metrics.delete_point(metric_id, point_id)
    console().print(f"[green]Deleted point {point_id} of metric {metric_id}[/]")
