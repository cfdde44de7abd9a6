"""Human-readable rendering of orb metadata.

Simple form is one line per orb; the detailed form adds a tree of commands,
jobs and executors with their parameters. `info` uses `orb_info_lines`.
"""

from __future__ import annotations

from core.domain.models import OrbElement, OrbElementParameter, OrbWithData

# Step lists can be arbitrarily large; their defaults are never printed.
_HIDDEN_DEFAULT_TYPES = frozenset({"steps"})
_VERBATIM_DEFAULT_TYPES = frozenset({"enum", "string"})


def parameter_default_suffix(parameter: OrbElementParameter) -> str:
    if parameter.default is None or parameter.type in _HIDDEN_DEFAULT_TYPES:
        return ""

    if parameter.type in _VERBATIM_DEFAULT_TYPES:
        rendered = str(parameter.default)
    elif parameter.type == "boolean":
        rendered = "true" if parameter.default is True or parameter.default == "true" else "false"
    else:
        return ""

    return f" (default: '{rendered}')"


def _element_lines(section: str, elements: dict[str, OrbElement]) -> list[str]:
    if not elements:
        return []

    lines = [f"  {section}:"]
    for element_name, element in elements.items():
        count = len(element.parameters)
        lines.append(f"    - {element_name}: {count} parameter(s)")
        for parameter_name, parameter in element.parameters.items():
            lines.append(
                f"       - {parameter_name}: {parameter.type}{parameter_default_suffix(parameter)}"
            )
    return lines


def orb_to_simple_string(orb: OrbWithData) -> str:
    return f"{orb.name} ({orb.highest_version})\n"


def orb_to_detailed_string(orb: OrbWithData) -> str:
    lines: list[str] = []
    lines.extend(_element_lines("Commands", orb.commands))
    lines.extend(_element_lines("Jobs", orb.jobs))
    lines.extend(_element_lines("Executors", orb.executors))

    out = orb_to_simple_string(orb)
    if lines:
        out += "\n".join(lines) + "\n"
    return out


def orb_info_lines(orb: OrbWithData) -> list[str]:
    """Summary printed by `info`: release history and element counts."""

    lines: list[str] = [""]
    if orb.versions:
        latest = orb.versions[0]
        first_release = orb.versions[-1]
        lines.append(f"Latest: {orb.name}@{orb.highest_version}")
        lines.append(f"Last-updated: {latest.created_at}")
        lines.append(f"Created: {orb.created_at}")
        lines.append(f"First-release: {first_release.version} @ {first_release.created_at}")
        lines.append(f"Total-revisions: {len(orb.versions)}")
    else:
        lines.append("This orb hasn't published any versions yet.")

    lines.append("")
    lines.append(f"Total-commands: {len(orb.commands)}")
    lines.append(f"Total-executors: {len(orb.executors)}")
    lines.append(f"Total-jobs: {len(orb.jobs)}")
    return lines
