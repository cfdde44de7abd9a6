"""Domain models (Pydantic v2).

These models mirror the registry payloads (camelCase aliases) so the same
shape is used when parsing responses and when dumping JSON listings.

Note:
- They describe *what* an orb looks like, not *how* it is fetched.
- Instances are read-only snapshots owned by a single command invocation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class OrbElementParameter(BaseModel):
    """A parameter of a command, job or executor."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str = Field(
        default="",
        description="Parameter type (string, boolean, enum, steps, integer, ...).",
    )
    default: Any = Field(
        default=None,
        description="Default value; its representation depends on `type`.",
    )
    description: str | None = Field(default=None)


class OrbElement(BaseModel):
    """A command, job or executor definition exposed by an orb."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: str | None = Field(default=None)
    parameters: dict[str, OrbElementParameter] = Field(default_factory=dict)


class OrbVersion(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    version: str = Field(..., min_length=1)
    created_at: str = Field(default="", alias="createdAt")


class OrbWithData(BaseModel):
    """Read-only snapshot of an orb and its latest elements."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(default="", description="Fully qualified name `namespace/orb`.")
    highest_version: str = Field(
        default="",
        alias="highestVersion",
        description="Highest released (or most recent) version known to the registry.",
    )
    created_at: str = Field(default="", alias="createdAt")
    versions: list[OrbVersion] = Field(
        default_factory=list,
        description="Versions, most recent first.",
    )
    commands: dict[str, OrbElement] = Field(default_factory=dict)
    jobs: dict[str, OrbElement] = Field(default_factory=dict)
    executors: dict[str, OrbElement] = Field(default_factory=dict)


class OrbsForListing(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    orbs: list[OrbWithData] = Field(default_factory=list)


class OrbIdentifier(BaseModel):
    """Registry identifiers resolved for a `namespace/name` pair."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    orb_id: str = Field(..., min_length=1, alias="orbId")
    namespace_id: str | None = Field(default=None, alias="namespaceId")


class OrbConfigResult(BaseModel):
    """Outcome of submitting an orb.yml for validation/processing."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    valid: bool = Field(default=False)
    errors: list[str] = Field(default_factory=list)
    source_yaml: str = Field(default="", alias="sourceYaml")
    output_yaml: str = Field(default="", alias="outputYaml")
