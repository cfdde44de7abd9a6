"""Error taxonomy shared by the core and the adapters.

Local errors (reference shape, segment, dev precondition) are raised before
any registry call. Remote failures are wrapped as `RegistryError` with enough
context to act on them without re-running in debug mode.
"""

from __future__ import annotations

from typing import Sequence


class OrbError(Exception):
    """Base class for every failure surfaced to the command layer."""


class InvalidReferenceFormat(OrbError):
    def __init__(self, reference: str, message: str) -> None:
        super().__init__(message)
        self.reference = reference


class InvalidSegment(OrbError):
    def __init__(self, label: str) -> None:
        super().__init__(f'expected `{label}` to be one of "major", "minor", or "patch"')
        self.label = label


class PromotionRequiresDevVersion(OrbError):
    def __init__(self, version: str) -> None:
        super().__init__(
            f"The version '{version}' must be a dev version (the string should begin `dev:`)"
        )
        self.version = version


class RegistryError(OrbError):
    """Any failure reported by, or while talking to, the registry."""


class OrbValidationError(OrbError):
    """Schema/content problems reported by the registry for validate/process."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = [m for m in messages if m]
        super().__init__("\n".join(self.messages) or "orb configuration is invalid")


class OrbFileError(OrbError):
    """The orb.yml to submit could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not load orb file at {path}: {reason}")
        self.path = path
