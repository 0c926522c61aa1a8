"""CLI output components (Rich).

Why separate components:
- Keeps command logic apart from rendering details.
- stdout carries only JSON so the tool stays scriptable; everything else goes
  to stderr.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

stdout_console = Console()
stderr_console = Console(stderr=True)


def to_jsonable(result: BaseModel | list[BaseModel]) -> Any:
    if isinstance(result, list):
        return [item.model_dump(mode="json") for item in result]
    return result.model_dump(mode="json")


def render_result(result: BaseModel | list[BaseModel], *, pretty: bool = False) -> None:
    """Print a decoded response: compact JSON, or indented and highlighted with `pretty`."""

    payload = to_jsonable(result)
    if pretty:
        stdout_console.print_json(data=payload)
        return
    typer.echo(json.dumps(payload, ensure_ascii=False, separators=(",", ":")))


def print_error(exc: BaseException | str) -> None:
    stderr_console.print(
        f"Error: {exc}",
        style="bold red",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def build_doctor_table() -> Table:
    table = Table(title="Beeminder CLI Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
