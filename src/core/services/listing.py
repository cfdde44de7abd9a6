"""Orb listing: pick the registry call and assemble the summary.

Output mode (JSON vs text, detail level, uncertified disclaimer) is passed in
as an explicit `OutputOptions` value per invocation.
"""

from __future__ import annotations

from dataclasses import dataclass

from adapters.json_exporter import listing_to_json
from core.domain.errors import RegistryError
from core.domain.models import OrbsForListing
from core.interfaces.registry import OrbRegistry
from core.services.metadata_formatter import orb_to_detailed_string, orb_to_simple_string


@dataclass(frozen=True)
class OutputOptions:
    json: bool = False
    details: bool = False
    include_uncertified: bool = False


async def list_orbs(
    registry: OrbRegistry,
    namespace: str | None,
    *,
    include_uncertified: bool,
) -> OrbsForListing:
    if namespace:
        try:
            return await registry.list_by_namespace(namespace)
        except RegistryError as exc:
            raise RegistryError(f"Failed to list orbs in namespace `{namespace}`: {exc}") from exc

    try:
        return await registry.list_all(include_uncertified)
    except RegistryError as exc:
        raise RegistryError(f"Failed to list orbs: {exc}") from exc


def listing_header(listing: OrbsForListing, *, include_uncertified: bool) -> str:
    header = f"Orbs found: {len(listing.orbs)}. "
    if include_uncertified:
        return header + "Includes all certified and uncertified orbs."
    return header + "Showing only certified orbs. Add -u for a list of all orbs."


def render_listing(listing: OrbsForListing, options: OutputOptions) -> str:
    if options.json:
        return listing_to_json(listing)

    out = listing_header(listing, include_uncertified=options.include_uncertified) + "\n\n"
    render = orb_to_detailed_string if options.details else orb_to_simple_string
    for orb in listing.orbs:
        out += render(orb)
    return out
