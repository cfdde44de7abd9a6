from __future__ import annotations

import pytest

from core.domain.models import OrbElement, OrbElementParameter, OrbVersion, OrbWithData
from core.services.metadata_formatter import (
    orb_info_lines,
    orb_to_detailed_string,
    orb_to_simple_string,
    parameter_default_suffix,
)


def _orb(**kwargs) -> OrbWithData:
    return OrbWithData(name="circleci/python", highest_version="0.1.4", **kwargs)


def test_simple_string() -> None:
    assert orb_to_simple_string(_orb()) == "circleci/python (0.1.4)\n"


@pytest.mark.parametrize(
    ("param", "suffix"),
    [
        (OrbElementParameter(type="steps", default=[{"run": "echo hi"}] * 50), ""),
        (OrbElementParameter(type="steps"), ""),
        (OrbElementParameter(type="string"), ""),
        (OrbElementParameter(type="string", default="3.8"), " (default: '3.8')"),
        (OrbElementParameter(type="enum", default="small"), " (default: 'small')"),
        (OrbElementParameter(type="boolean", default=True), " (default: 'true')"),
        (OrbElementParameter(type="boolean", default=False), " (default: 'false')"),
        (OrbElementParameter(type="integer", default=3), ""),
        (OrbElementParameter(type="env_var_name", default="TOKEN"), ""),
    ],
)
def test_parameter_default_suffix(param: OrbElementParameter, suffix: str) -> None:
    assert parameter_default_suffix(param) == suffix


def test_detailed_string_lists_elements_and_parameters() -> None:
    orb = _orb(
        commands={
            "install": OrbElement(
                parameters={
                    "version": OrbElementParameter(type="string", default="3.8"),
                    "cache": OrbElementParameter(type="boolean", default=True),
                }
            ),
            "noop": OrbElement(),
        },
        executors={
            "default": OrbElement(
                parameters={"steps": OrbElementParameter(type="steps", default=[])}
            ),
        },
    )

    assert orb_to_detailed_string(orb) == (
        "circleci/python (0.1.4)\n"
        "  Commands:\n"
        "    - install: 2 parameter(s)\n"
        "       - version: string (default: '3.8')\n"
        "       - cache: boolean (default: 'true')\n"
        "    - noop: 0 parameter(s)\n"
        "  Executors:\n"
        "    - default: 1 parameter(s)\n"
        "       - steps: steps\n"
    )


def test_detailed_string_without_elements_equals_simple() -> None:
    assert orb_to_detailed_string(_orb()) == orb_to_simple_string(_orb())


def test_info_lines_with_versions() -> None:
    orb = _orb(
        created_at="2018-09-24T08:53:37.086Z",
        versions=[
            OrbVersion(version="0.1.4", created_at="2018-11-01T00:00:00.000Z"),
            OrbVersion(version="0.1.0", created_at="2018-09-24T09:00:00.000Z"),
        ],
        jobs={"test": OrbElement()},
    )

    lines = orb_info_lines(orb)

    assert "Latest: circleci/python@0.1.4" in lines
    assert "Last-updated: 2018-11-01T00:00:00.000Z" in lines
    assert "Created: 2018-09-24T08:53:37.086Z" in lines
    assert "First-release: 0.1.0 @ 2018-09-24T09:00:00.000Z" in lines
    assert "Total-revisions: 2" in lines
    assert lines[-3:] == ["Total-commands: 0", "Total-executors: 0", "Total-jobs: 1"]


def test_info_lines_without_versions() -> None:
    lines = orb_info_lines(_orb())

    assert "This orb hasn't published any versions yet." in lines
    assert not any(line.startswith("Latest:") for line in lines)
