from __future__ import annotations

from collections import Counter

import pytest

from core.domain.errors import RegistryError
from core.domain.models import (
    OrbConfigResult,
    OrbIdentifier,
    OrbsForListing,
    OrbWithData,
)
from core.domain.segments import Segment


class FakeRegistry:
    """In-memory registry double that records every remote call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self.failures: dict[str, list[Exception]] = {}
        self.highest_version = "1.1.0"
        self.listing = OrbsForListing()
        self.info = OrbWithData(name="circleci/python", highest_version="0.1.4")
        self.source = "version: 2.1\n"
        self.config_result = OrbConfigResult(valid=True, output_yaml="processed: true\n")

    def fail(self, method: str, *errors: Exception) -> None:
        """Queue errors raised by the next calls to `method`."""

        self.failures.setdefault(method, []).extend(errors)

    @property
    def counts(self) -> Counter:
        return Counter(name for name, _ in self.calls)

    def _record(self, method: str, *args: object) -> None:
        self.calls.append((method, args))
        queued = self.failures.get(method)
        if queued:
            raise queued.pop(0)

    async def __aenter__(self) -> "FakeRegistry":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def resolve_id(self, namespace: str, name: str) -> OrbIdentifier:
        self._record("resolve_id", namespace, name)
        return OrbIdentifier(orb_id=f"id-{namespace}-{name}")

    async def publish_by_id(self, path: str, orb_id: str, version: str) -> OrbWithData:
        self._record("publish_by_id", path, orb_id, version)
        return OrbWithData(highest_version=version)

    async def increment_version(
        self, path: str, namespace: str, name: str, segment: Segment
    ) -> OrbWithData:
        self._record("increment_version", path, namespace, name, segment)
        return OrbWithData(name=f"{namespace}/{name}", highest_version=self.highest_version)

    async def promote(
        self, namespace: str, name: str, version: str, segment: Segment
    ) -> OrbWithData:
        self._record("promote", namespace, name, version, segment)
        return OrbWithData(name=f"{namespace}/{name}", highest_version=self.highest_version)

    async def create_orb(self, namespace: str, name: str) -> OrbIdentifier:
        self._record("create_orb", namespace, name)
        return OrbIdentifier(orb_id="new-orb-id", namespace_id="ns-id")

    async def list_all(self, include_uncertified: bool) -> OrbsForListing:
        self._record("list_all", include_uncertified)
        return self.listing

    async def list_by_namespace(self, namespace: str) -> OrbsForListing:
        self._record("list_by_namespace", namespace)
        return self.listing

    async def fetch_source(self, ref: str) -> str:
        self._record("fetch_source", ref)
        return self.source

    async def fetch_info(self, ref: str) -> OrbWithData:
        self._record("fetch_info", ref)
        return self.info

    async def validate_or_process(self, path: str) -> OrbConfigResult:
        self._record("validate_or_process", path)
        return self.config_result


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def registry_error() -> RegistryError:
    return RegistryError("connection reset by peer")
