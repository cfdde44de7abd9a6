"""Orb source helpers: reading orb.yml input and parsing published sources.

The registry returns each version's raw YAML source; commands, jobs and
executors (with their parameters) are extracted from it with PyYAML.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as SchemaError

from core.domain.errors import OrbFileError, RegistryError
from core.domain.models import OrbElement

STDIN_PATH = "-"
ELEMENT_SECTIONS = ("commands", "jobs", "executors")


def read_orb_yaml(path: str) -> str:
    """Read the orb.yml at `path`, or stdin when `path` is `-`."""

    if path == STDIN_PATH:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise OrbFileError(path, exc.strerror or str(exc)) from exc


def _elements(raw: Any) -> dict[str, OrbElement]:
    if not isinstance(raw, dict):
        return {}
    out: dict[str, OrbElement] = {}
    for name, body in raw.items():
        if not isinstance(body, dict):
            body = {}
        params = body.get("parameters")
        if not isinstance(params, dict):
            body = {**body, "parameters": {}}
        else:
            # A parameter declared without a body (`foo:`) is still a parameter.
            body = {**body, "parameters": {k: v or {} for k, v in params.items()}}
        out[str(name)] = OrbElement.model_validate(body)
    return out


def parse_orb_elements(source: str, *, label: str) -> dict[str, dict[str, OrbElement]]:
    """Return `{"commands": ..., "jobs": ..., "executors": ...}` from a YAML source."""

    try:
        doc = yaml.safe_load(source) if source else {}
        if doc is None:
            doc = {}
        if not isinstance(doc, dict):
            raise RegistryError(f"Corrupt Orb {label}: expected a mapping at the top level")
        return {section: _elements(doc.get(section)) for section in ELEMENT_SECTIONS}
    except (yaml.YAMLError, SchemaError) as exc:
        raise RegistryError(f"Corrupt Orb {label}: {exc}") from exc
