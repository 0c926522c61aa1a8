"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer

from adapters.beeminder_url import BeeminderUrl
from adapters.http_client import build_async_client
from cli.state import CliState
from cli.ui_components import build_doctor_table, stderr_console, stdout_console
from core.config import AppSettings, get_user_config_file, load_settings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")


async def _check_api(
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    url = BeeminderUrl(settings.username, settings.auth_token, settings.api_root)
    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url.build(".json"))
        return response.is_success, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(ctx: typer.Context) -> None:
    """Show where credentials come from and probe the API with them."""

    state = ctx.ensure_object(CliState)
    settings = state.settings or load_settings()

    table = build_doctor_table()

    config_file = get_user_config_file()
    if config_file.is_file():
        table.add_row("Config file", "OK", str(config_file))
    else:
        table.add_row("Config file", "OPTIONAL", f"{config_file} (not found)")

    if settings.username:
        table.add_row("Username", "OK", settings.username)
    else:
        table.add_row("Username", "MISSING", "--username, BEEMINDER_USERNAME or `username` in config")
    if settings.auth_token:
        table.add_row("Auth token", "OK", "set (hidden)")
    else:
        table.add_row("Auth token", "MISSING", "--auth-token, BEEMINDER_AUTH_TOKEN or `auth_token` in config")
    table.add_row("API root", "OK", settings.api_root)

    if settings.username and settings.auth_token:
        ok_api, detail_api = asyncio.run(_check_api(settings, state.transport))
        table.add_row("API access", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API access", "SKIPPED", "credentials incomplete")

    stdout_console.print(table)

    if not (settings.username and settings.auth_token):
        stderr_console.print(
            "\n[yellow]Note:[/yellow] Get your token at https://www.beeminder.com/api/v1/auth_token.json"
        )
