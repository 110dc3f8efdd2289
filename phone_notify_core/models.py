"""Data model for the phone notification core.

All records are frozen dataclasses. Payloads are rebuilt on every render
and customised per recipient with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .categories import ActionKind, AlertCategory, MatchType, RestrictionKind


@dataclass(frozen=True)
class BlockedEvent:
    """A single blocked call or message.

    Attributes:
        number: Caller number, empty for private callers.
        timestamp: When the call or message was blocked.
        match_type: Which kind of blacklist rule matched.
    """

    number: str
    timestamp: datetime
    match_type: MatchType


@dataclass(frozen=True)
class AlertIdentity:
    """Shell address of an alert: category plus optional tag.

    Indicators tied to a subscription use the subscription id as tag, so
    each line gets its own alert.
    """

    category: AlertCategory
    sub_id: int | None = None

    @property
    def tag(self) -> str | None:
        """Shell tag string, or None for untagged alerts."""
        return None if self.sub_id is None else str(self.sub_id)


@dataclass(frozen=True)
class AlertAction:
    """Abstract action reference.

    Attributes:
        kind: What the action opens or does.
        label: Button label (empty for content/dismiss actions).
        target: Kind-specific argument (number to unblock, etc.).
        sub_id: Subscription the action applies to, if any.
    """

    kind: ActionKind
    label: str = ""
    target: str | None = None
    sub_id: int | None = None


@dataclass(frozen=True)
class AlertPayload:
    """Everything the shell needs to present one alert.

    Attributes:
        identity: Category and tag the alert is addressed by.
        title: Alert title.
        body: Alert body text.
        lines: Per-event lines for grouped alerts, newest first.
        group_count: Number of grouped events, None for single alerts.
        action_enabled: Whether the alert offers its secondary action.
        content_action: Tap target; stripped for non-owner profiles when
            the action is owner-only.
        actions: Secondary action buttons.
        dismiss_action: Action run when the user dismisses the alert.
        sound: Whether the alert plays a sound.
        vibrate: Whether the alert vibrates.
        ongoing: Whether the alert is persistent (not user dismissable).
        color: ARGB tint, if any.
        when: Timestamp shown with the alert, if any.
    """

    identity: AlertIdentity
    title: str
    body: str
    lines: tuple[str, ...] = ()
    group_count: int | None = None
    action_enabled: bool = False
    content_action: AlertAction | None = None
    actions: tuple[AlertAction, ...] = ()
    dismiss_action: AlertAction | None = None
    sound: bool = False
    vibrate: bool = False
    ongoing: bool = False
    color: int | None = None
    when: datetime | None = None


@dataclass(frozen=True)
class UserProfile:
    """An operating-system user profile.

    Attributes:
        handle: Shell recipient handle.
        is_owner: Whether this is the device owner.
        is_managed_profile: Whether this is a work/managed profile.
        restrictions: Restrictions applied to the profile.
    """

    handle: int
    is_owner: bool = False
    is_managed_profile: bool = False
    restrictions: frozenset[RestrictionKind] = field(default_factory=lambda: frozenset())

    def has_restriction(self, restriction: RestrictionKind) -> bool:
        return restriction in self.restrictions


@dataclass(frozen=True)
class SubscriptionInfo:
    """Subscription metadata from the subscription directory."""

    sub_id: int
    display_name: str
    icon_tint: int | None = None
    active: bool = True
