from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import asdict
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

from cachet.client import Client
from cachet.core import Meta
from cachet.errors import CachetError
from cachet.models import Record
from cachet.settings import load_settings

_CONSOLE = Console()
_ERR_CONSOLE = Console(stderr=True)
ENV_LOG_DIR = "CACHET_LOG_DIR"


def console() -> Console:
    return _CONSOLE


def log_dir() -> Path:
    """Directory for CLI log files: $CACHET_LOG_DIR, else `logs/cli` under the working directory."""
    configured = os.getenv(ENV_LOG_DIR)
    return Path(configured) if configured else Path.cwd() / "logs" / "cli"


def configure_logging(name: str) -> None:
    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / f"{name}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def build_client(config: Optional[Path]) -> Client:
    settings = load_settings(config)
    return Client.from_settings(settings)


def client_from_context(ctx: typer.Context) -> Client:
    obj = ctx.find_root().obj or {}
    return build_client(obj.get("config"))


def reject_hidden_visibility(visible: Optional[int]) -> None:
    """Refuse `--visible 0` on updates: a zero group visibility is left out of the request body."""
    if visible == 0:
        raise typer.BadParameter("a group cannot be made logged-in only through an update", param_hint="--visible")


@contextmanager
def api_errors() -> Iterator[None]:
    """Turn client failures into a red message and exit code 1."""
    try:
        yield
    except CachetError as exc:
        logging.getLogger(__name__).error("Command failed: %s", exc)
        _ERR_CONSOLE.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _cell(value: Any) -> str:
    if isinstance(value, IntEnum):
        return value.name.lower()
    if isinstance(value, list):
        return str(len(value))
    if value is None or value == "":
        return "-"
    return str(value)


def print_record(record: Record) -> None:
    console().print_json(data=asdict(record))


def render_table(title: str, rows: Sequence[Any], columns: Sequence[str], meta: Optional[Meta] = None) -> None:
    table = Table(title=title)
    for column in columns:
        table.add_column(column, justify="right" if column == "id" else "left")
    for row in rows:
        table.add_row(*(_cell(getattr(row, column)) for column in columns))
    console().print(table)
    if meta is not None and meta.pagination.total_pages:
        pagination = meta.pagination
        console().print(
            f"page {pagination.current_page}/{pagination.total_pages} "
            f"({pagination.count} of {pagination.total})"
        )
