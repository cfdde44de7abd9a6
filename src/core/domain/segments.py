"""Semantic-version segments accepted by increment/promote."""

from __future__ import annotations

from enum import Enum

from core.domain.errors import InvalidSegment


class Segment(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


def validate_segment(label: str) -> Segment:
    """Return the `Segment` for `label`; only the lowercase literals are accepted."""

    for segment in Segment:
        if segment.value == label:
            return segment
    raise InvalidSegment(label)
