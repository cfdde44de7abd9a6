"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.graphql_client import GraphQLClient
from cli.state import CliState
from cli.ui_components import build_checks_table
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import RegistryError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PING_QUERY = "query { __typename }"


async def _check_registry(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with GraphQLClient(settings) as client:
            data = await client.run(PING_QUERY, operation="Ping")
        return True, str(data.get("__typename") or "OK")
    except RegistryError as exc:
        return False, str(exc)


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics against the configured registry."""

    state = ctx.find_object(CliState)
    settings = state.settings if state else AppSettings()

    table = build_checks_table("orbctl Doctor")
    table.add_row("Registry URL", "OK", settings.graphql_url)
    if settings.token:
        table.add_row("API token", "OK", "Token configured")
    else:
        table.add_row("API token", "MISSING", "Run `orbctl doctor setup-token` (needed to publish)")

    ok, detail = asyncio.run(_check_registry(settings))
    table.add_row("GraphQL connectivity", "OK" if ok else "FAIL", detail)

    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)


@app.command(name="setup-token")
def setup_token() -> None:
    """Store the API token (and optionally the host) in the user config .env."""

    host = typer.prompt("Registry host", default=AppSettings.model_fields["host"].default).strip()
    token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()

    if not host or not token:
        raise typer.BadParameter("host and token are required")

    env_path = write_user_env_vars({"ORBCTL_HOST": host, "ORBCTL_TOKEN": token})
    _console.print(f"[green]Saved registry config to:[/green] {env_path}")
