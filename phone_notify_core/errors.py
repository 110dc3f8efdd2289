"""Error types for the phone notification core.

None of these escape the coordinator's public operations; they exist so the
lookup helpers can signal failure and the configuration loader can report a
bad file to whoever loads it.
"""

from __future__ import annotations


class NotifyCoreError(Exception):
    """Base error for phone notification core failures."""


class ConfigLoadError(NotifyCoreError):
    """Configuration or string catalog file could not be loaded."""


class UnresolvedReferenceError(NotifyCoreError):
    """A subscription, phone or user lookup returned nothing."""

    def __init__(self, kind: str, ref: object) -> None:
        super().__init__(f"Unresolved {kind}: {ref}")
        self.kind = kind
        self.ref = ref
