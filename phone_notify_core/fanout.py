"""Multi-user fanout of alerts.

One rendered payload is replicated across the device's user profiles.
Each category has a ``FanoutRule`` saying which profiles are eligible;
eligible profiles get their own copy, with the tap target removed for
everyone but the owner when the action is owner-only.

Cancellation is broadcast to all users instead of enumerating profiles.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from .categories import ALL_USERS, AlertCategory, RestrictionKind
from .models import AlertIdentity, AlertPayload, UserProfile
from .ports import NotificationShell, UserDirectory

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FanoutRule:
    """Which profiles receive a category's alerts.

    Attributes:
        exclude_managed: Skip managed (work) profiles.
        excluded_restriction: Skip profiles carrying this restriction.
        owner_only: Deliver to the device owner only.
    """

    exclude_managed: bool = True
    excluded_restriction: RestrictionKind | None = None
    owner_only: bool = False


def fanout_rule(category: AlertCategory) -> FanoutRule:
    """Fanout rule for ``category``."""
    match category:
        case AlertCategory.VOICEMAIL:
            return FanoutRule(excluded_restriction=RestrictionKind.DISALLOW_OUTGOING_CALLS)
        case AlertCategory.BLACKLISTED_CALL | AlertCategory.BLACKLISTED_MESSAGE:
            return FanoutRule(owner_only=True)
        case _:
            return FanoutRule()


def is_eligible(rule: FanoutRule, profile: UserProfile) -> bool:
    """Whether ``profile`` should receive an alert under ``rule``."""
    if rule.owner_only and not profile.is_owner:
        return False
    if rule.exclude_managed and profile.is_managed_profile:
        return False
    return rule.excluded_restriction is None or not profile.has_restriction(
        rule.excluded_restriction
    )


class FanoutDispatcher:
    """Presents and cancels alerts across user profiles."""

    def __init__(self, shell: NotificationShell, users: UserDirectory) -> None:
        self._shell = shell
        self._users = users

    def present(
        self,
        category: AlertCategory,
        sub_id: int | None,
        payload: AlertPayload,
        owner_only_action: bool = False,
    ) -> tuple[int, ...]:
        """Present ``payload`` to every eligible profile.

        Args:
            category: Alert category; selects the fanout rule.
            sub_id: Subscription used as the alert tag, or None.
            payload: Rendered payload.
            owner_only_action: Strip the tap target for non-owner profiles.

        Returns:
            Handles of the profiles the alert was presented to.
        """
        rule = fanout_rule(category)
        identity = AlertIdentity(category, sub_id)
        base = dataclasses.replace(payload, identity=identity)

        recipients: list[int] = []
        for profile in self._users.list_profiles():
            if not is_eligible(rule, profile):
                _LOGGER.debug(
                    "[%s] Skipping user %s", category.name, profile.handle
                )
                continue
            personal = base
            if owner_only_action and not profile.is_owner:
                personal = dataclasses.replace(base, content_action=None)
            self._shell.present(identity, personal, profile.handle)
            recipients.append(profile.handle)

        return tuple(recipients)

    def cancel(self, category: AlertCategory, sub_id: int | None = None) -> None:
        """Cancel the alert for every user."""
        self._shell.cancel(AlertIdentity(category, sub_id), ALL_USERS)
