"""Per-invocation CLI state stored on the Click context."""

from __future__ import annotations

from dataclasses import dataclass

from core.config import AppSettings


@dataclass(frozen=True)
class CliState:
    settings: AppSettings
