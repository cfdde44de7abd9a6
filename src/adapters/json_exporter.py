"""JSON export of listing snapshots.

The payload is the registry shape (camelCase aliases) with no computed
fields, so other tools can consume `orbctl orb list --json` directly.
"""

from __future__ import annotations

import json

from core.domain.models import OrbsForListing


def listing_to_json(listing: OrbsForListing) -> str:
    """Serialize `OrbsForListing` with 2-space indentation and stable field names."""

    payload = listing.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, ensure_ascii=False, indent=2)
