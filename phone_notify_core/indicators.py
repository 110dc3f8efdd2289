"""Per-subscription status indicators.

Message-waiting (voicemail) and call-forwarding indicators are level
triggered: each ``update`` carries the desired visibility for one
subscription, which is remembered per subscription for the lifetime of
the process. Visible indicators are rendered and fanned out; hidden ones
are cancelled for every user.

Failure handling:
- Unresolved phone or subscription: warn and abandon the present step
- SIM records still loading: defer silently, a later event corrects it
- Device not voice capable: message-waiting updates are ignored
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from .categories import NO_SUB_ID, ActionKind, AlertCategory
from .errors import UnresolvedReferenceError
from .fanout import FanoutDispatcher
from .models import AlertAction, AlertIdentity, AlertPayload, SubscriptionInfo
from .ports import PhoneLine, SubscriptionDirectory, TelephonySource
from .strings import StringCatalog
from .trace import DecisionOutcome, DecisionTracer

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


def require(value: _T | None, kind: str, ref: object) -> _T:
    """Return ``value`` or raise UnresolvedReferenceError if it is None."""
    if value is None:
        raise UnresolvedReferenceError(kind, ref)
    return value


class MessageWaitingIndicator:
    """Voicemail indicator state, one flag per subscription."""

    category = AlertCategory.VOICEMAIL

    def __init__(
        self,
        *,
        voice_capable: bool,
        telephony: TelephonySource,
        subscriptions: SubscriptionDirectory,
        fanout: FanoutDispatcher,
        strings: StringCatalog,
        tracer: DecisionTracer,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._voice_capable = voice_capable
        self._telephony = telephony
        self._subscriptions = subscriptions
        self._fanout = fanout
        self._strings = strings
        self._tracer = tracer
        self._clock = clock
        self._visible: dict[int, bool] = {}

    @property
    def tracked(self) -> dict[int, bool]:
        """Copy of the per-subscription visibility map."""
        return dict(self._visible)

    def is_visible(self, sub_id: int) -> bool:
        return self._visible.get(sub_id, False)

    def update(self, sub_id: int, visible: bool, play_sound: bool = True) -> None:
        """Show or hide the voicemail indicator for ``sub_id``."""
        if not self._voice_capable:
            _LOGGER.warning(
                "[sub %s] Message waiting update on non-voice-capable device, ignoring",
                sub_id,
            )
            self._tracer.record(
                self.category, DecisionOutcome.SKIPPED, sub_id=sub_id, reason="not_voice_capable"
            )
            return

        _LOGGER.info("[sub %s] Message waiting update to %s", sub_id, visible)
        self._visible[sub_id] = visible

        if not visible:
            self._fanout.cancel(self.category, sub_id)
            self._tracer.record(self.category, DecisionOutcome.CANCELLED, sub_id=sub_id)
            return

        try:
            phone = require(self._telephony.phone(sub_id), "phone", sub_id)
            info = require(self._subscriptions.resolve(sub_id), "subscription", sub_id)
        except UnresolvedReferenceError as err:
            _LOGGER.warning("[sub %s] %s", sub_id, err)
            self._tracer.record(
                self.category, DecisionOutcome.SKIPPED, sub_id=sub_id, reason=f"no_{err.kind}"
            )
            return

        if phone.voicemail_number() is None and not phone.icc_records_loaded():
            _LOGGER.debug("[sub %s] No voicemail number yet, SIM records not loaded", sub_id)
            self._tracer.record(
                self.category, DecisionOutcome.DEFERRED, sub_id=sub_id, reason="sim_records_loading"
            )
            return

        payload = self.render(sub_id, phone, info, play_sound)
        recipients = self._fanout.present(self.category, sub_id, payload)
        self._tracer.record(
            self.category, DecisionOutcome.PRESENTED, sub_id=sub_id, recipients=recipients
        )

    def refresh(self, sub_id: int) -> None:
        """Re-present a visible indicator without sound.

        ``NO_SUB_ID`` resolves to the only tracked subscription when exactly
        one is tracked.
        """
        if sub_id == NO_SUB_ID and len(self._visible) == 1:
            sub_id = next(iter(self._visible))

        if not self._visible.get(sub_id, False):
            _LOGGER.debug("[sub %s] Refresh skipped, indicator not visible", sub_id)
            return

        self.update(sub_id, True, play_sound=False)

    def render(
        self,
        sub_id: int,
        phone: PhoneLine,
        info: SubscriptionInfo,
        play_sound: bool,
    ) -> AlertPayload:
        """Build the voicemail payload for ``sub_id``."""
        if phone.supports_voicemail_count():
            title = self._strings.get("voicemail_title_count", count=phone.voicemail_count())
        else:
            title = self._strings.get("voicemail_title")

        vm_number = phone.voicemail_number()
        if not vm_number:
            # No number to dial; send the user to voicemail setup instead.
            body = self._strings.get("voicemail_no_number")
            action = AlertAction(kind=ActionKind.VOICEMAIL_SETTINGS, sub_id=sub_id)
        else:
            if self._subscriptions.active_count() > 1:
                body = info.display_name
            else:
                body = self._strings.get("voicemail_dial", number=vm_number)
            action = AlertAction(kind=ActionKind.DIAL_VOICEMAIL, target=vm_number, sub_id=sub_id)

        return AlertPayload(
            identity=AlertIdentity(self.category, sub_id),
            title=title,
            body=body,
            content_action=action,
            sound=play_sound,
            vibrate=phone.voicemail_vibration_enabled(),
            ongoing=True,
            color=info.icon_tint,
            when=self._clock(),
        )


class CallForwardingIndicator:
    """Unconditional call forwarding indicator, one flag per subscription."""

    category = AlertCategory.CALL_FORWARD

    def __init__(
        self,
        *,
        subscriptions: SubscriptionDirectory,
        fanout: FanoutDispatcher,
        strings: StringCatalog,
        tracer: DecisionTracer,
    ) -> None:
        self._subscriptions = subscriptions
        self._fanout = fanout
        self._strings = strings
        self._tracer = tracer
        self._visible: dict[int, bool] = {}

    @property
    def tracked(self) -> dict[int, bool]:
        """Copy of the per-subscription visibility map."""
        return dict(self._visible)

    def is_visible(self, sub_id: int) -> bool:
        return self._visible.get(sub_id, False)

    def update(self, sub_id: int, visible: bool) -> None:
        """Show or hide the call forwarding indicator for ``sub_id``."""
        _LOGGER.debug("[sub %s] Call forwarding update to %s", sub_id, visible)
        self._visible[sub_id] = visible

        if not visible:
            self._fanout.cancel(self.category, sub_id)
            self._tracer.record(self.category, DecisionOutcome.CANCELLED, sub_id=sub_id)
            return

        try:
            info = require(self._subscriptions.resolve(sub_id), "subscription", sub_id)
        except UnresolvedReferenceError as err:
            _LOGGER.warning("[sub %s] %s", sub_id, err)
            self._tracer.record(
                self.category, DecisionOutcome.SKIPPED, sub_id=sub_id, reason=f"no_{err.kind}"
            )
            return

        recipients = self._fanout.present(
            self.category, sub_id, self.render(info), owner_only_action=True
        )
        self._tracer.record(
            self.category, DecisionOutcome.PRESENTED, sub_id=sub_id, recipients=recipients
        )

    def render(self, info: SubscriptionInfo) -> AlertPayload:
        """Build the call forwarding payload for a subscription."""
        if self._subscriptions.active_count() > 1:
            title = info.display_name
        else:
            title = self._strings.get("call_forward_label")

        return AlertPayload(
            identity=AlertIdentity(self.category, info.sub_id),
            title=title,
            body=self._strings.get("call_forward_enabled"),
            content_action=AlertAction(kind=ActionKind.CALL_FORWARD_SETTINGS, sub_id=info.sub_id),
            ongoing=True,
            color=info.icon_tint,
        )
