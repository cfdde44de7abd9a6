from __future__ import annotations

import sys

import pytest

from core.config import AppSettings, get_user_env_file, write_user_env_vars


def test_graphql_url_joins_host_and_endpoint() -> None:
    settings = AppSettings(_env_file=None, host="https://registry.test/", endpoint="/graphql")

    assert settings.graphql_url == "https://registry.test/graphql"


def test_environment_overrides_defaults(monkeypatch) -> None:
    monkeypatch.setenv("ORBCTL_HOST", "https://example.test")
    monkeypatch.setenv("ORBCTL_LISTING_PAGE_SIZE", "50")

    settings = AppSettings(_env_file=None)

    assert settings.host == "https://example.test"
    assert settings.listing_page_size == 50
    assert settings.graphql_url == "https://example.test/graphql-unstable"


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="XDG layout")
def test_write_user_env_vars_merges_existing(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    env_file = get_user_env_file()
    env_file.parent.mkdir(parents=True)
    env_file.write_text('# comment\nORBCTL_HOST="https://old.test"\nOTHER=1\n', encoding="utf-8")

    path = write_user_env_vars({"ORBCTL_HOST": "https://new.test", "ORBCTL_TOKEN": "abc"})

    assert path == tmp_path / "orbctl" / ".env"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "# orbctl user config (.env)",
        "ORBCTL_HOST=https://new.test",
        "ORBCTL_TOKEN=abc",
        "OTHER=1",
    ]
