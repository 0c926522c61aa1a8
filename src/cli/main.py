"""Typer application: `beeminder user | goal ... | datapoint ... | doctor ...`.

Each subcommand only builds a `core.domain.commands` value; `_run` executes it
and is the single place where errors become messages and exit codes.
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Optional

import httpx
import typer

from cli import doctor
from cli.state import CliState
from cli.ui_components import print_error, render_result
from core.config import load_settings
from core.domain.commands import (
    Command,
    CreateDatapoint,
    DeleteDatapoint,
    ListDatapoints,
    ListGoals,
    PutDatapoints,
    ShowGoal,
    ShowUser,
)
from core.domain.errors import ConfigurationError, DatapointParseError
from core.logging import setup_logging
from core.services.dispatcher import execute

EXIT_FAILURE = 1
EXIT_USAGE = 2

app = typer.Typer(
    no_args_is_help=True,
    help="CLI for the Beeminder REST API.",
    pretty_exceptions_enable=False,
)
goal_app = typer.Typer(no_args_is_help=True, help="Relates to goals of a Beeminder user.")
datapoint_app = typer.Typer(no_args_is_help=True, help="Relates to datapoints of a Beeminder user.")

app.add_typer(goal_app, name="goal")
app.add_typer(datapoint_app, name="datapoint")
app.add_typer(doctor.app, name="doctor")


@app.callback()
def main(
    ctx: typer.Context,
    auth_token: Annotated[
        Optional[str],
        typer.Option(
            "--auth-token",
            "-a",
            help="Beeminder API token. If unset uses BEEMINDER_AUTH_TOKEN or the config file.",
        ),
    ] = None,
    username: Annotated[
        Optional[str],
        typer.Option(
            "--username",
            "-u",
            help="Beeminder username. If unset uses BEEMINDER_USERNAME or the config file.",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr.")] = False,
    pretty: Annotated[bool, typer.Option("--pretty", help="Indent and highlight JSON output.")] = False,
) -> None:
    setup_logging(verbose=verbose)
    state = ctx.ensure_object(CliState)
    state.pretty = pretty
    try:
        state.settings = load_settings(username=username, auth_token=auth_token)
    except ValueError as exc:
        # ValidationError and tomllib.TOMLDecodeError (malformed config file).
        print_error(exc)
        raise typer.Exit(code=EXIT_USAGE) from exc


def _run(ctx: typer.Context, command: Command) -> None:
    state = ctx.ensure_object(CliState)
    try:
        result = asyncio.run(execute(command, state.settings, transport=state.transport))
    except ConfigurationError as exc:
        print_error(exc)
        raise typer.Exit(code=EXIT_USAGE) from exc
    except (DatapointParseError, httpx.HTTPError, ValueError) as exc:
        # ValueError covers undecodable JSON and pydantic ValidationError.
        print_error(exc)
        raise typer.Exit(code=EXIT_FAILURE) from exc

    if result is not None:
        render_result(result, pretty=state.pretty)


@app.command()
def user(ctx: typer.Context) -> None:
    """Show the Beeminder user."""

    _run(ctx, ShowUser())


@goal_app.command("list")
def goal_list(ctx: typer.Context) -> None:
    """List all goals of a user."""

    _run(ctx, ListGoals())


@goal_app.command("info")
def goal_info(ctx: typer.Context, goal: Annotated[str, typer.Argument(help="Goal slug.")]) -> None:
    """Show information about a goal."""

    _run(ctx, ShowGoal(goal=goal))


@datapoint_app.command("list")
def datapoint_list(ctx: typer.Context, goal: Annotated[str, typer.Argument(help="Goal slug.")]) -> None:
    """List datapoints of a goal."""

    _run(ctx, ListDatapoints(goal=goal))


@datapoint_app.command("create")
def datapoint_create(
    ctx: typer.Context,
    goal: Annotated[str, typer.Argument(help="Goal slug.")],
    value: Annotated[float, typer.Option("--value", "-v", help="Datapoint value.")],
    timestamp: Annotated[
        Optional[int], typer.Option("--timestamp", "-t", help="Epoch seconds.")
    ] = None,
    daystamp: Annotated[
        Optional[str], typer.Option("--daystamp", "-d", help="Day as YYYYMMDD.")
    ] = None,
    comment: Annotated[Optional[str], typer.Option("--comment", "-c")] = None,
    request_id: Annotated[
        Optional[str],
        typer.Option("--request-id", "-i", help="Idempotency key; the service ignores repeats."),
    ] = None,
) -> None:
    """Create a datapoint from CLI flags."""

    _run(
        ctx,
        CreateDatapoint(
            goal=goal,
            value=value,
            timestamp=timestamp,
            daystamp=daystamp,
            comment=comment,
            request_id=request_id,
        ),
    )


@datapoint_app.command("put")
def datapoint_put(ctx: typer.Context, goal: Annotated[str, typer.Argument(help="Goal slug.")]) -> None:
    """Create datapoints from STDIN formatted input.

    One datapoint per line: `YYYY-MM-DD HH:MM:SS VALUE ['COMMENT']`.
    Timestamps are taken as UTC.
    """

    try:
        text = typer.get_text_stream("stdin").read()
    except UnicodeDecodeError as exc:
        print_error(f"standard input is not valid UTF-8 ({exc})")
        raise typer.Exit(code=EXIT_FAILURE) from exc
    _run(ctx, PutDatapoints(goal=goal, text=text))


@datapoint_app.command("delete")
def datapoint_delete(
    ctx: typer.Context,
    goal: Annotated[str, typer.Argument(help="Goal slug.")],
    datapoint_id: Annotated[str, typer.Argument(help="Datapoint id.")],
) -> None:
    """Delete a datapoint."""

    _run(ctx, DeleteDatapoint(goal=goal, id=datapoint_id))


def run() -> None:
    app()
