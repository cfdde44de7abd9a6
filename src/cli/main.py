"""Root Typer application: global options and command groups."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console

from cli import doctor, orb_commands
from cli.logging_setup import configure_logging
from cli.state import CliState
from cli.ui_components import print_error
from core.config import AppSettings

__version__ = "0.1.0"

_err_console = Console(stderr=True, highlight=False, soft_wrap=True)

app = typer.Typer(
    name="orbctl",
    help="Manage orbs held in a remote registry.",
    no_args_is_help=True,
    add_completion=False,
)
app.add_typer(orb_commands.app, name="orb")
app.add_typer(doctor.app, name="doctor")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"orbctl {__version__}")
        raise typer.Exit(code=0)


@app.callback()
def app_callback(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Registry host (env: ORBCTL_HOST)"),
    endpoint: str | None = typer.Option(
        None, "--endpoint", help="GraphQL endpoint path (env: ORBCTL_ENDPOINT)"
    ),
    token: str | None = typer.Option(None, "--token", help="API token (env: ORBCTL_TOKEN)"),
    debug: bool = typer.Option(False, "--debug", help="Log registry requests to stderr"),
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True),
) -> None:
    del version
    overrides: dict[str, object] = {}
    if host:
        overrides["host"] = host
    if endpoint:
        overrides["endpoint"] = endpoint
    if token:
        overrides["token"] = token
    if debug:
        overrides["debug"] = True

    try:
        settings = AppSettings().model_copy(update=overrides)
    except ValidationError as exc:
        print_error(_err_console, f"Invalid configuration: {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(settings.debug)
    ctx.obj = CliState(settings=settings)


def run() -> None:
    app()
