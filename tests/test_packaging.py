from __future__ import annotations

import re
from importlib.metadata import requires


def test_runtime_imports_are_declared() -> None:
    declared = {
        re.split(r"[<>=!~;\[ ]", requirement, maxsplit=1)[0].lower()
        for requirement in requires("orbctl") or []
    }

    assert {"typer", "click", "rich", "httpx", "pydantic", "pydantic-settings", "pyyaml"} <= declared
