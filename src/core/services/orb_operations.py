"""Single-call orb commands: create, validate, process, source, info."""

from __future__ import annotations

from dataclasses import dataclass

from adapters.orb_source import STDIN_PATH
from core.domain.errors import OrbValidationError, RegistryError
from core.domain.models import OrbConfigResult, OrbWithData
from core.domain.references import ParsedReference, parse_reference
from core.interfaces.registry import OrbRegistry


@dataclass
class CreateResult:
    reference: ParsedReference
    orb_id: str

    def messages(self) -> list[str]:
        return [
            f"Orb `{self.reference}` created.",
            "Please note that any versions you publish of this orb are world-readable.",
            f"You can now register versions of `{self.reference}` using `orbctl orb publish`.",
        ]


async def create_orb(registry: OrbRegistry, *, ref: str) -> CreateResult:
    reference = parse_reference(ref, require_version=False)
    try:
        identifier = await registry.create_orb(reference.namespace, reference.name)
    except RegistryError as exc:
        raise RegistryError(f"Failed to create orb `{reference}`: {exc}") from exc
    return CreateResult(reference=reference, orb_id=identifier.orb_id)


async def _submit(registry: OrbRegistry, path: str) -> OrbConfigResult:
    result = await registry.validate_or_process(path)
    if not result.valid or result.errors:
        raise OrbValidationError(result.errors)
    return result


async def validate_orb(registry: OrbRegistry, *, path: str) -> str:
    """Validate the orb.yml at `path`; returns the confirmation message."""

    await _submit(registry, path)
    if path == STDIN_PATH:
        return "Orb input is valid."
    return f"Orb at `{path}` is valid."


async def process_orb(registry: OrbRegistry, *, path: str) -> str:
    """Validate and return the orb as it looks after pre-registration processing."""

    result = await _submit(registry, path)
    return result.output_yaml


async def fetch_source(registry: OrbRegistry, *, ref: str) -> str:
    try:
        return await registry.fetch_source(ref)
    except RegistryError as exc:
        raise RegistryError(f"Failed to get source for '{ref}': {exc}") from exc


async def fetch_info(registry: OrbRegistry, *, ref: str) -> OrbWithData:
    try:
        return await registry.fetch_info(ref)
    except RegistryError as exc:
        raise RegistryError(f"Failed to get info for '{ref}': {exc}") from exc
