"""Process-wide logging for the CLI (Rich handler on stderr)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(debug: bool = False) -> None:
    """Install a `RichHandler` on the root logger; DEBUG with `--debug`, else WARNING."""

    global _CONFIGURED

    level = logging.DEBUG if debug else logging.WARNING
    root = logging.getLogger()
    root.setLevel(level)
    if _CONFIGURED:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=debug,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    # httpx logs every request at INFO; keep it behind --debug.
    logging.getLogger("httpx").setLevel(level)
    _CONFIGURED = True
