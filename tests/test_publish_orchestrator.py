from __future__ import annotations

import asyncio

import pytest

from core.domain.errors import (
    InvalidReferenceFormat,
    InvalidSegment,
    PromotionRequiresDevVersion,
    RegistryError,
)
from core.domain.models import OrbIdentifier
from core.domain.segments import Segment
from core.services.publish_orchestrator import (
    WORLD_READABLE_NOTICE,
    PublishHooks,
    PublishState,
    increment,
    promote,
    publish,
)


async def test_publish_resolves_then_publishes(registry) -> None:
    states: list[PublishState] = []

    result = await publish(
        registry,
        path="orb.yml",
        ref="circleci/python@0.1.4",
        hooks=PublishHooks(state_changed=states.append),
    )

    assert [name for name, _ in registry.calls] == ["resolve_id", "publish_by_id"]
    assert registry.calls[1] == ("publish_by_id", ("orb.yml", "id-circleci-python", "0.1.4"))
    assert states == [PublishState.RESOLVING, PublishState.PUBLISHING, PublishState.DONE]
    assert result.message == "Orb `circleci/python@0.1.4` was published."
    assert result.advisories == [WORLD_READABLE_NOTICE]


async def test_publish_dev_version_adds_expiry_advisories(registry) -> None:
    result = await publish(registry, path="orb.yml", ref="my-ns/foo-orb@dev:latest")

    assert result.advisories[0] == WORLD_READABLE_NOTICE
    assert any("can be overwritten" in a and "dev:latest" in a for a in result.advisories)
    assert any("expire in 90 days" in a for a in result.advisories)


async def test_publish_malformed_reference_makes_no_remote_call(registry) -> None:
    with pytest.raises(InvalidReferenceFormat):
        await publish(registry, path="orb.yml", ref="circleci/python")

    assert registry.calls == []


async def test_publish_never_writes_when_resolve_fails(registry) -> None:
    registry.fail("resolve_id", RegistryError("the 'python' orb does not exist"))

    with pytest.raises(RegistryError, match="Failed to resolve orb `circleci/python`") as excinfo:
        await publish(registry, path="orb.yml", ref="circleci/python@0.1.4")

    assert isinstance(excinfo.value.__cause__, RegistryError)
    assert registry.counts["publish_by_id"] == 0


async def test_publish_retry_after_failed_write_succeeds(registry) -> None:
    registry.fail("publish_by_id", RegistryError("version 0.1.4 already exists"))

    with pytest.raises(RegistryError, match="Failed to publish orb `circleci/python@0.1.4`"):
        await publish(registry, path="orb.yml", ref="circleci/python@0.1.4")

    result = await publish(registry, path="orb.yml", ref="circleci/python@0.1.4")

    assert result.orb.highest_version == "0.1.4"
    assert registry.counts == {"resolve_id": 2, "publish_by_id": 2}


async def test_publish_cancelled_during_resolve_never_publishes() -> None:
    release = asyncio.Event()
    calls: list[str] = []

    class SlowRegistry:
        async def resolve_id(self, namespace: str, name: str) -> OrbIdentifier:
            calls.append("resolve_id")
            await release.wait()
            return OrbIdentifier(orb_id="id")

        async def publish_by_id(self, path: str, orb_id: str, version: str):
            calls.append("publish_by_id")
            raise AssertionError("publish must not run after cancellation")

    task = asyncio.create_task(
        publish(SlowRegistry(), path="orb.yml", ref="circleci/python@0.1.4")  # type: ignore[arg-type]
    )
    while not calls:
        await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert calls == ["resolve_id"]


async def test_increment_issues_exactly_one_call(registry) -> None:
    result = await increment(registry, path="orb.yml", ref="foo/bar", segment="minor")

    assert registry.calls == [("increment_version", ("orb.yml", "foo", "bar", Segment.MINOR))]
    assert result.message == "Orb `foo/bar` has been incremented to `foo/bar@1.1.0`."
    assert result.advisories == [WORLD_READABLE_NOTICE]


async def test_increment_invalid_segment_fails_before_network(registry) -> None:
    with pytest.raises(InvalidSegment):
        await increment(registry, path="orb.yml", ref="foo/bar", segment="Minor")

    assert registry.calls == []


async def test_increment_rejects_versioned_reference(registry) -> None:
    with pytest.raises(InvalidReferenceFormat):
        await increment(registry, path="orb.yml", ref="foo/bar@1.0.0", segment="minor")

    assert registry.calls == []


async def test_increment_wraps_registry_failure(registry, registry_error) -> None:
    registry.fail("increment_version", registry_error)

    with pytest.raises(RegistryError, match="Failed to increment orb `foo/bar`: connection reset"):
        await increment(registry, path="orb.yml", ref="foo/bar", segment="patch")


async def test_promote_released_version_makes_zero_calls(registry) -> None:
    with pytest.raises(PromotionRequiresDevVersion) as excinfo:
        await promote(registry, ref="foo/bar@1.0.0", segment="major")

    assert excinfo.value.version == "1.0.0"
    assert "must be a dev version" in str(excinfo.value)
    assert registry.calls == []


async def test_promote_dev_version_calls_registry(registry) -> None:
    registry.highest_version = "1.0.0"

    result = await promote(registry, ref="my-ns/foo-orb@dev:latest", segment="major")

    assert registry.calls == [("promote", ("my-ns", "foo-orb", "dev:latest", Segment.MAJOR))]
    assert result.message == "Orb `my-ns/foo-orb@dev:latest` was promoted to `my-ns/foo-orb@1.0.0`."


async def test_promote_validates_segment_before_dev_check(registry) -> None:
    with pytest.raises(InvalidSegment):
        await promote(registry, ref="foo/bar@dev:master", segment="huge")

    assert registry.calls == []
