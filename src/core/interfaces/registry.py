"""Registry contract consumed by the core services.

The core depends on this Protocol only; the GraphQL adapter implements it and
tests substitute in-memory fakes. Every method is a single remote call from
the caller's point of view and raises `RegistryError` on failure.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import OrbConfigResult, OrbIdentifier, OrbsForListing, OrbWithData
from core.domain.segments import Segment


@runtime_checkable
class OrbRegistry(Protocol):
    async def resolve_id(self, namespace: str, name: str) -> OrbIdentifier:
        """Resolve `namespace/name` to registry identifiers (read)."""

        ...

    async def publish_by_id(self, path: str, orb_id: str, version: str) -> OrbWithData:
        """Publish the orb.yml at `path` under `version` (write)."""

        ...

    async def increment_version(
        self, path: str, namespace: str, name: str, segment: Segment
    ) -> OrbWithData:
        """Publish `path` as the next `segment` release; the registry picks the number."""

        ...

    async def promote(
        self, namespace: str, name: str, version: str, segment: Segment
    ) -> OrbWithData:
        """Promote a dev version to the next `segment` release."""

        ...

    async def create_orb(self, namespace: str, name: str) -> OrbIdentifier:
        ...

    async def list_all(self, include_uncertified: bool) -> OrbsForListing:
        ...

    async def list_by_namespace(self, namespace: str) -> OrbsForListing:
        ...

    async def fetch_source(self, ref: str) -> str:
        ...

    async def fetch_info(self, ref: str) -> OrbWithData:
        ...

    async def validate_or_process(self, path: str) -> OrbConfigResult:
        """Submit the orb.yml at `path` (`-` for stdin) to the registry."""

        ...
