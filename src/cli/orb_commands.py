"""`orbctl orb ...` commands.

Each command parses its arguments, delegates to a core service and prints the
result. Every `OrbError` becomes a red message on stderr and exit code 1.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import click
import typer
from rich.console import Console
from typer.core import TyperGroup

from adapters.registry_client import GraphQLOrbRegistry
from cli.state import CliState
from cli.ui_components import print_error, print_lines, print_publish_result
from core.config import AppSettings
from core.domain.errors import OrbError
from core.interfaces.registry import OrbRegistry
from core.services import listing, orb_operations, publish_orchestrator
from core.services.metadata_formatter import orb_info_lines

T = TypeVar("T")

PATH_HELP = 'The path to your orb (use "-" for STDIN)'
ORB_HELP = "A fully-qualified reference to an orb. This takes the form namespace/orb@version"
NAMESPACE_HELP = "The namespace used for the orb (i.e. circleci)"
SEGMENT_HELP = '"major"|"minor"|"patch"'

_console = Console(highlight=False, soft_wrap=True)
_err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def build_registry(settings: AppSettings) -> GraphQLOrbRegistry:
    return GraphQLOrbRegistry(settings)


def _settings(ctx: typer.Context) -> AppSettings:
    state = ctx.find_object(CliState)
    if state is None:
        return AppSettings()
    return state.settings


def _execute(ctx: typer.Context, operation: Callable[[OrbRegistry], Awaitable[T]]) -> T:
    settings = _settings(ctx)

    async def _go() -> T:
        async with build_registry(settings) as registry:
            return await operation(registry)

    try:
        return asyncio.run(_go())
    except OrbError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc


class PublishGroup(TyperGroup):
    """`publish <path> <orb>` runs the default command; `increment`/`promote` nest under it."""

    default_command = "release"

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if args and args[0] not in self.commands and (args[0] == "-" or not args[0].startswith("-")):
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)


app = typer.Typer(no_args_is_help=True, help="Operate on orbs.")
publish_app = typer.Typer(
    cls=PublishGroup,
    no_args_is_help=True,
    help=(
        "Publish an orb to the registry: `publish <path> <orb>`.\n\n"
        "Please note that at this time all orbs published to the registry are world-readable."
    ),
)
app.add_typer(publish_app, name="publish")


@app.command("list")
def list_command(
    ctx: typer.Context,
    namespace: str | None = typer.Argument(None, help=f"{NAMESPACE_HELP} (Optional)"),
    uncertified: bool = typer.Option(False, "--uncertified", "-u", help="include uncertified orbs"),
    json_output: bool = typer.Option(
        False,
        "--json",
        hidden=True,
        help="print output as json instead of human-readable",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        "-d",
        help="output all the commands, executors, and jobs, along with a tree of their parameters",
    ),
) -> None:
    """List orbs."""

    orbs = _execute(
        ctx,
        lambda registry: listing.list_orbs(registry, namespace, include_uncertified=uncertified),
    )
    options = listing.OutputOptions(
        json=json_output,
        details=details,
        include_uncertified=uncertified,
    )
    rendered = listing.render_listing(orbs, options)
    if json_output:
        typer.echo(rendered)
    else:
        _console.print(rendered, markup=False, end="")


@app.command("create")
def create_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., metavar="<namespace>/<orb>", help="Orb to create."),
) -> None:
    """Create an orb in the specified namespace.

    Please note that at this time all orbs created in the registry are world-readable.
    """

    result = _execute(ctx, lambda registry: orb_operations.create_orb(registry, ref=ref))
    print_lines(_console, result.messages())


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help=PATH_HELP),
) -> None:
    """Validate an orb.yml."""

    message = _execute(ctx, lambda registry: orb_operations.validate_orb(registry, path=path))
    _console.print(message, markup=False)


@app.command("process")
def process_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help=PATH_HELP),
) -> None:
    """Validate an orb and print its form after all pre-registration processing."""

    output = _execute(ctx, lambda registry: orb_operations.process_orb(registry, path=path))
    _console.print(output, markup=False)


@publish_app.command("release", hidden=True)
def publish_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help=PATH_HELP),
    ref: str = typer.Argument(..., metavar="<orb>", help=ORB_HELP),
) -> None:
    """Publish a version of an orb."""

    result = _execute(
        ctx,
        lambda registry: publish_orchestrator.publish(registry, path=path, ref=ref),
    )
    print_publish_result(_console, result)


def increment_command(
    ctx: typer.Context,
    path: str = typer.Argument(..., help=PATH_HELP),
    ref: str = typer.Argument(..., metavar="<namespace>/<orb>", help="Orb to increment."),
    segment: str = typer.Argument(..., help=SEGMENT_HELP),
) -> None:
    """Increment a released version of an orb.

    Example: 'orbctl orb publish increment foo/orb.yml foo/bar minor' => foo/bar@1.1.0
    """

    result = _execute(
        ctx,
        lambda registry: publish_orchestrator.increment(
            registry, path=path, ref=ref, segment=segment
        ),
    )
    print_publish_result(_console, result)


publish_app.command("increment")(increment_command)
publish_app.command("inc", hidden=True)(increment_command)


@publish_app.command("promote")
def promote_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., metavar="<orb>", help=ORB_HELP),
    segment: str = typer.Argument(..., help=SEGMENT_HELP),
) -> None:
    """Promote a development version of an orb to a semantic release.

    Example: 'orbctl orb publish promote foo/bar@dev:master major' => foo/bar@1.0.0
    """

    result = _execute(
        ctx,
        lambda registry: publish_orchestrator.promote(registry, ref=ref, segment=segment),
    )
    print_publish_result(_console, result)


@app.command("source")
def source_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., metavar="<orb>", help=ORB_HELP),
) -> None:
    """Show the source of an orb.

    Examples: 'orbctl orb source circleci/python@0.1.4',
    'orbctl orb source my-ns/foo-orb@dev:latest'
    """

    source = _execute(ctx, lambda registry: orb_operations.fetch_source(registry, ref=ref))
    _console.print(source, markup=False)


@app.command("info")
def info_command(
    ctx: typer.Context,
    ref: str = typer.Argument(..., metavar="<orb>", help=ORB_HELP),
) -> None:
    """Show the meta-data of an orb."""

    orb = _execute(ctx, lambda registry: orb_operations.fetch_info(registry, ref=ref))
    print_lines(_console, orb_info_lines(orb))
