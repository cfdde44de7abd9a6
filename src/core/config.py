"""Core configuration.

Centralizes environment variables (pydantic-settings) so the CLI and the
registry adapters read the same values. CLI options override them per
invocation through `AppSettings.model_copy(update=...)`.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "orbctl"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Write/update variables in the user's global .env."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# orbctl user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    try:
        os.chmod(env_path, 0o600)
    except OSError:
        # Not supported on every filesystem (e.g. some Windows mounts).
        pass
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Lookup order: explicit CLI options, environment (`ORBCTL_*`), the project
    `.env`, then the user config `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORBCTL_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str = Field(
        default="https://circleci.com",
        min_length=8,
        description="Registry host.",
    )
    endpoint: str = Field(
        default="graphql-unstable",
        min_length=1,
        description="GraphQL endpoint path, relative to `host`.",
    )
    token: str | None = Field(
        default=None,
        description="API token sent in the Authorization header.",
    )
    debug: bool = Field(
        default=False,
        description="Log GraphQL requests/responses at DEBUG level.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="orbctl/0.1",
        min_length=1,
        description="User-Agent sent to the registry.",
    )
    listing_page_size: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Orbs requested per page when listing.",
    )

    @property
    def graphql_url(self) -> str:
        return f"{self.host.rstrip('/')}/{self.endpoint.lstrip('/')}"
