"""Collaborator boundary.

This module defines the interfaces the notification core needs from the
host platform. The core never renders, never resolves resources and never
talks to telephony hardware itself; it asks these collaborators.

Key principles:
- Every call is synchronous and fire-and-forget from the core's view
- Lookups return None when a reference cannot be resolved
- Implementations own all platform-specific concerns
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import AlertIdentity, AlertPayload, SubscriptionInfo, UserProfile

# Preference keys for the persisted manual network selection, suffixed with
# the subscription id. Empty value means automatic selection.
NETWORK_SELECTION_NAME_KEY = "network_selection_name_key"
NETWORK_SELECTION_KEY = "network_selection_key"


class NotificationShell(ABC):
    """The host's present/cancel primitive."""

    @abstractmethod
    def present(self, identity: AlertIdentity, payload: AlertPayload, user: int) -> None:
        """Show or replace the alert addressed by (identity, user)."""

    @abstractmethod
    def cancel(self, identity: AlertIdentity, user: int) -> None:
        """Remove the alert addressed by (identity, user).

        ``user`` may be ``ALL_USERS``.
        """

    def show_transient(self, text: str) -> None:  # noqa: B027
        """Show a short-lived message. Optional for shells without toasts."""

    def cancel_transient(self) -> None:  # noqa: B027
        """Hide the current short-lived message, if any."""


class SubscriptionDirectory(ABC):
    """Read-only subscription metadata."""

    @abstractmethod
    def resolve(self, sub_id: int) -> SubscriptionInfo | None:
        """Active subscription for ``sub_id``, or None."""

    @abstractmethod
    def active_count(self) -> int:
        """Number of active subscriptions on the device."""


class PhoneLine(ABC):
    """Voicemail-related state of one phone line."""

    @abstractmethod
    def voicemail_number(self) -> str | None:
        """Voicemail number; None while unknown, empty when not configured."""

    @abstractmethod
    def voicemail_count(self) -> int:
        """Number of waiting voicemails, when counting is supported."""

    @abstractmethod
    def icc_records_loaded(self) -> bool:
        """Whether the SIM records have finished loading."""

    @abstractmethod
    def supports_voicemail_count(self) -> bool:
        """Whether the network reports a voicemail count."""

    def voicemail_vibration_enabled(self) -> bool:
        """Whether voicemail alerts should vibrate on this line."""
        return False


class TelephonySource(ABC):
    """Access to phone lines and radio capabilities."""

    @abstractmethod
    def phone(self, sub_id: int) -> PhoneLine | None:
        """Phone line for ``sub_id``, or None."""

    @abstractmethod
    def default_sub_id(self) -> int:
        """Subscription id of the default phone; negative if invalid."""

    def supports_network_selection(self) -> bool:
        """Whether the default phone allows manual network selection."""
        return True


class PreferenceStore(ABC):
    """Persisted key/value preferences."""

    @abstractmethod
    def get_string(self, key: str, default: str = "") -> str:
        """String preference, or ``default`` when absent."""

    def manual_selection(self, sub_id: int) -> str:
        """Manually selected operator for ``sub_id``; empty means automatic.

        The operator alpha name is preferred; the numeric id is used when
        no name was stored.
        """
        selection = self.get_string(f"{NETWORK_SELECTION_NAME_KEY}{sub_id}", "")
        if not selection:
            selection = self.get_string(f"{NETWORK_SELECTION_KEY}{sub_id}", "")
        return selection


class UserDirectory(ABC):
    """Enumerates user profiles on the device."""

    @abstractmethod
    def list_profiles(self) -> Sequence[UserProfile]:
        """All live user profiles."""
