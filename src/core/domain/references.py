"""Orb reference parsing and version classification.

A reference takes the form `namespace/name` or `namespace/name@version`.
Versions starting with `dev:` are provisional (dev) labels; anything else is
a released semantic version.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import InvalidReferenceFormat

DEV_VERSION_PREFIX = "dev:"


class VersionKind(str, Enum):
    """Released (immutable, semantic) or Dev (mutable, expiring) version."""

    RELEASED = "released"
    DEV = "dev"


class ParsedReference(BaseModel):
    """A reference split into its parts. Created per command, never persisted."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(..., min_length=1, description="Registry namespace (e.g. 'circleci').")
    name: str = Field(..., min_length=1, description="Orb name inside the namespace.")
    version: str | None = Field(
        default=None,
        min_length=1,
        description="Version label: a semantic version or `dev:<label>`.",
    )

    @property
    def slug(self) -> str:
        return f"{self.namespace}/{self.name}"

    @property
    def kind(self) -> VersionKind | None:
        if self.version is None:
            return None
        return classify_version(self.version)

    def __str__(self) -> str:
        if self.version is None:
            return self.slug
        return f"{self.slug}@{self.version}"


def split_namespace_and_name(ref: str) -> tuple[str, str]:
    """Split `namespace/name` on the first `/`."""

    namespace, sep, name = ref.partition("/")
    if not sep or not namespace or not name or "/" in name or "@" in name:
        raise InvalidReferenceFormat(
            ref,
            f"Invalid namespace/orb: {ref}. "
            "Expected a namespace and orb in the form 'namespace/orb'",
        )
    return namespace, name


def split_namespace_name_and_version(ref: str) -> tuple[str, str, str]:
    """Split `namespace/name@version` into its three parts."""

    head, sep, version = ref.partition("@")
    if not sep or not version or "@" in version:
        raise InvalidReferenceFormat(
            ref,
            f"Invalid orb reference '{ref}': Expected a namespace, orb and version "
            "in the format 'namespace/orb@version'",
        )
    try:
        namespace, name = split_namespace_and_name(head)
    except InvalidReferenceFormat as exc:
        raise InvalidReferenceFormat(
            ref,
            f"Invalid orb reference '{ref}': Expected a namespace, orb and version "
            "in the format 'namespace/orb@version'",
        ) from exc
    return namespace, name, version


def parse_reference(ref: str, *, require_version: bool) -> ParsedReference:
    if require_version:
        namespace, name, version = split_namespace_name_and_version(ref)
        return ParsedReference(namespace=namespace, name=name, version=version)
    namespace, name = split_namespace_and_name(ref)
    return ParsedReference(namespace=namespace, name=name)


def classify_version(version: str) -> VersionKind:
    if version.startswith(DEV_VERSION_PREFIX):
        return VersionKind.DEV
    return VersionKind.RELEASED


def is_dev_version(version: str) -> bool:
    return classify_version(version) is VersionKind.DEV
