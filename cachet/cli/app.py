from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .common import configure_logging
from .subapps.component_groups import component_groups_app
from .subapps.metric_groups import metric_groups_app
from .subapps.metrics import metrics_app

app = typer.Typer(help="Cachet status page command line interface", no_args_is_help=True)
app.add_typer(component_groups_app, name="component-groups")
app.add_typer(metric_groups_app, name="metric-groups")
app.add_typer(metrics_app, name="metrics")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to the Cachet settings file"),
) -> None:
    configure_logging("cli")
    ctx.obj = {"config": config}


if __name__ == "__main__":
    app()
