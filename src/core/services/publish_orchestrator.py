"""Publish / increment / promote orchestration.

Every operation validates its input locally (reference shape, segment, dev
precondition) before the first registry call, so malformed input never costs
a round trip. Publish is a two-step sequence (resolve the orb id, then write);
the write step is only reachable from a successful resolve. Nothing is cached
between invocations, so retrying a failed publish simply resolves again.

Cancellation follows asyncio semantics: a cancelled task stops at the pending
await and never issues the next remote call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, TypeVar

from core.domain.errors import PromotionRequiresDevVersion, RegistryError
from core.domain.models import OrbIdentifier, OrbWithData
from core.domain.references import ParsedReference, VersionKind, parse_reference
from core.domain.segments import validate_segment
from core.interfaces.registry import OrbRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORLD_READABLE_NOTICE = "Please note that this is an open orb and is world-readable."
DEV_VERSION_TTL_DAYS = 90


class PublishState(str, Enum):
    RESOLVING = "resolving"
    PUBLISHING = "publishing"
    DONE = "done"


@dataclass
class PublishHooks:
    """Optional callbacks for UI layers (spinners, verbose traces)."""

    state_changed: Callable[[PublishState], None] | None = None


@dataclass
class PublishResult:
    """Outcome of a successful publish/increment/promote."""

    reference: ParsedReference
    orb: OrbWithData
    message: str
    advisories: list[str] = field(default_factory=list)


async def _remote(call: Awaitable[T], context: str) -> T:
    try:
        return await call
    except RegistryError as exc:
        raise RegistryError(f"{context}: {exc}") from exc


def _released(reference: ParsedReference, orb: OrbWithData) -> ParsedReference:
    return ParsedReference(
        namespace=reference.namespace,
        name=reference.name,
        version=orb.highest_version or reference.version,
    )


def dev_version_advisories(version: str) -> list[str]:
    return [
        f"Note that your dev label `{version}` can be overwritten by anyone in your organization.",
        f"Your dev orb will expire in {DEV_VERSION_TTL_DAYS} days unless a new version "
        f"is published on the label `{version}`.",
    ]


async def publish(
    registry: OrbRegistry,
    *,
    path: str,
    ref: str,
    hooks: PublishHooks | None = None,
) -> PublishResult:
    hooks = hooks or PublishHooks()
    reference = parse_reference(ref, require_version=True)
    assert reference.version is not None

    state = PublishState.RESOLVING
    identifier: OrbIdentifier | None = None
    orb: OrbWithData | None = None

    while state is not PublishState.DONE:
        logger.debug("publish %s: %s", reference, state.value)
        if hooks.state_changed:
            hooks.state_changed(state)

        if state is PublishState.RESOLVING:
            identifier = await _remote(
                registry.resolve_id(reference.namespace, reference.name),
                f"Failed to resolve orb `{reference.slug}`",
            )
            state = PublishState.PUBLISHING
        elif state is PublishState.PUBLISHING:
            assert identifier is not None
            orb = await _remote(
                registry.publish_by_id(path, identifier.orb_id, reference.version),
                f"Failed to publish orb `{reference}`",
            )
            state = PublishState.DONE

    if hooks.state_changed:
        hooks.state_changed(PublishState.DONE)
    assert orb is not None

    advisories = [WORLD_READABLE_NOTICE]
    if reference.kind is VersionKind.DEV:
        advisories.extend(dev_version_advisories(reference.version))

    return PublishResult(
        reference=reference,
        orb=orb,
        message=f"Orb `{ref}` was published.",
        advisories=advisories,
    )


async def increment(
    registry: OrbRegistry,
    *,
    path: str,
    ref: str,
    segment: str,
) -> PublishResult:
    reference = parse_reference(ref, require_version=False)
    bump = validate_segment(segment)

    logger.debug("increment %s by %s", reference, bump.value)
    orb = await _remote(
        registry.increment_version(path, reference.namespace, reference.name, bump),
        f"Failed to increment orb `{reference}`",
    )
    return PublishResult(
        reference=reference,
        orb=orb,
        message=f"Orb `{ref}` has been incremented to `{_released(reference, orb)}`.",
        advisories=[WORLD_READABLE_NOTICE],
    )


async def promote(
    registry: OrbRegistry,
    *,
    ref: str,
    segment: str,
) -> PublishResult:
    reference = parse_reference(ref, require_version=True)
    bump = validate_segment(segment)
    assert reference.version is not None
    if reference.kind is not VersionKind.DEV:
        raise PromotionRequiresDevVersion(reference.version)

    logger.debug("promote %s by %s", reference, bump.value)
    orb = await _remote(
        registry.promote(reference.namespace, reference.name, reference.version, bump),
        f"Failed to promote orb `{reference}`",
    )
    return PublishResult(
        reference=reference,
        orb=orb,
        message=f"Orb `{ref}` was promoted to `{_released(reference, orb)}`.",
        advisories=[WORLD_READABLE_NOTICE],
    )
