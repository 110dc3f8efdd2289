"""Notification state coordinator.

This module provides the single entry point the telephony event layer
talks to. It owns every stateful component (blacklist aggregator,
per-subscription indicators, network selection latch) and routes their
payloads through the fanout dispatcher to the notification shell.

State is mutated without per-component locking, so every public
operation runs under one coordinator mutex. That keeps the single logical
writer assumption true even when the host calls in from several threads.

Usage:
    coordinator = init_coordinator(
        shell=shell,
        subscriptions=subscriptions,
        telephony=telephony,
        preferences=preferences,
        users=users,
        config=load_config(path),
    )
    coordinator.record_blocked_call("5551234", now, MatchType.LIST)
    coordinator.update_message_waiting(sub_id, True)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from .blacklist import BlacklistAggregator
from .categories import AlertCategory, BlockMask, MatchType, ServiceState
from .config import NotifyConfig
from .fanout import FanoutDispatcher
from .indicators import CallForwardingIndicator, MessageWaitingIndicator
from .models import BlockedEvent
from .network import NetworkSelectionWatchdog, render_roaming_disconnected
from .ports import (
    NotificationShell,
    PreferenceStore,
    SubscriptionDirectory,
    TelephonySource,
    UserDirectory,
)
from .trace import DecisionOutcome, DecisionTracer, TraceEmitter

_LOGGER = logging.getLogger(__name__)


class NotificationCoordinator:
    """Façade over the notification state components."""

    def __init__(
        self,
        *,
        shell: NotificationShell,
        subscriptions: SubscriptionDirectory,
        telephony: TelephonySource,
        preferences: PreferenceStore,
        users: UserDirectory,
        config: NotifyConfig | None = None,
        emitter: TraceEmitter | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize coordinator.

        Args:
            shell: Host present/cancel primitive.
            subscriptions: Subscription metadata lookup.
            telephony: Phone lines and radio capabilities.
            preferences: Persisted preferences (manual network selection).
            users: User profile enumeration.
            config: Runtime configuration (defaults if omitted).
            emitter: Decision trace sink (only used when tracing is enabled).
            clock: Source of the current time.
        """
        self.config = config or NotifyConfig()
        self._shell = shell
        self._lock = threading.RLock()

        strings = self.config.string_catalog()
        self._strings = strings
        self._tracer = DecisionTracer(self.config.trace, emitter, clock=clock)
        self._fanout = FanoutDispatcher(shell, users)

        self._blacklist = BlacklistAggregator(strings, clock=clock)
        self._message_waiting = MessageWaitingIndicator(
            voice_capable=self.config.voice_capable,
            telephony=telephony,
            subscriptions=subscriptions,
            fanout=self._fanout,
            strings=strings,
            tracer=self._tracer,
            clock=clock,
        )
        self._call_forwarding = CallForwardingIndicator(
            subscriptions=subscriptions,
            fanout=self._fanout,
            strings=strings,
            tracer=self._tracer,
        )
        self._network_selection = NetworkSelectionWatchdog(
            telephony=telephony,
            preferences=preferences,
            fanout=self._fanout,
            strings=strings,
            tracer=self._tracer,
        )

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def blocked_events(self, category: AlertCategory) -> tuple[BlockedEvent, ...]:
        """Blocked events recorded for ``category``, newest first."""
        with self._lock:
            return self._blacklist.events(category)

    def message_waiting_visible(self, sub_id: int) -> bool:
        with self._lock:
            return self._message_waiting.is_visible(sub_id)

    def call_forwarding_visible(self, sub_id: int) -> bool:
        with self._lock:
            return self._call_forwarding.is_visible(sub_id)

    @property
    def network_selection_showing(self) -> bool:
        """Whether the selected-operator-unavailable alert is up."""
        with self._lock:
            return self._network_selection.showing

    # ------------------------------------------------------------------
    # Blacklist
    # ------------------------------------------------------------------

    def record_blocked_call(
        self, number: str | None, timestamp: datetime, match_type: MatchType
    ) -> None:
        """Record a blocked call and refresh the blocked-calls alert."""
        self._record_blocked(AlertCategory.BLACKLISTED_CALL, number, timestamp, match_type)

    def record_blocked_message(
        self, number: str | None, timestamp: datetime, match_type: MatchType
    ) -> None:
        """Record a blocked message and refresh the blocked-messages alert."""
        self._record_blocked(AlertCategory.BLACKLISTED_MESSAGE, number, timestamp, match_type)

    def _record_blocked(
        self,
        category: AlertCategory,
        number: str | None,
        timestamp: datetime,
        match_type: MatchType,
    ) -> None:
        with self._lock:
            if not self.config.blacklist_notify_enabled:
                _LOGGER.debug("[%s] Blacklist notifications disabled", category.name)
                self._tracer.record(
                    category, DecisionOutcome.SKIPPED, reason="blacklist_notify_disabled"
                )
                return

            payload = self._blacklist.record(category, number, timestamp, match_type)
            recipients = self._fanout.present(category, None, payload)
            self._tracer.record(category, DecisionOutcome.PRESENTED, recipients=recipients)

    def clear_blocked(self, mask: BlockMask | int) -> None:
        """Clear the blacklist categories selected by ``mask``."""
        with self._lock:
            for category in BlockMask(mask).categories():
                dropped = self._blacklist.clear(category)
                _LOGGER.debug("[%s] Cleared %d blocked events", category.name, dropped)
                self._fanout.cancel(category)
                self._tracer.record(category, DecisionOutcome.CANCELLED)

    # ------------------------------------------------------------------
    # Indicators
    # ------------------------------------------------------------------

    def update_message_waiting(self, sub_id: int, visible: bool, play_sound: bool = True) -> None:
        """Show or hide the voicemail indicator for a subscription."""
        with self._lock:
            self._message_waiting.update(sub_id, visible, play_sound)

    def refresh_message_waiting(self, sub_id: int) -> None:
        """Re-present the voicemail indicator silently, if visible."""
        with self._lock:
            self._message_waiting.refresh(sub_id)

    def update_call_forwarding(self, sub_id: int, visible: bool) -> None:
        """Show or hide the call forwarding indicator for a subscription."""
        with self._lock:
            self._call_forwarding.update(sub_id, visible)

    def update_network_selection_status(self, service_state: ServiceState) -> None:
        """Re-evaluate the selected-operator-unavailable alert."""
        with self._lock:
            self._network_selection.update(service_state)

    # ------------------------------------------------------------------
    # Stateless alerts
    # ------------------------------------------------------------------

    def show_roaming_data_disconnected(self) -> None:
        """Show the "data disconnected while roaming" alert."""
        category = AlertCategory.DATA_DISCONNECTED_ROAMING
        with self._lock:
            recipients = self._fanout.present(
                category,
                None,
                render_roaming_disconnected(self._strings),
                owner_only_action=True,
            )
            self._tracer.record(category, DecisionOutcome.PRESENTED, recipients=recipients)

    def hide_roaming_data_disconnected(self) -> None:
        """Hide the "data disconnected while roaming" alert."""
        category = AlertCategory.DATA_DISCONNECTED_ROAMING
        with self._lock:
            self._fanout.cancel(category)
            self._tracer.record(category, DecisionOutcome.CANCELLED)

    def post_transient_message(self, text: str) -> None:
        """Replace any pending transient message with ``text``."""
        with self._lock:
            self._shell.cancel_transient()
            self._shell.show_transient(text)


# ----------------------------------------------------------------------
# One-time construction
# ----------------------------------------------------------------------

_INSTANCE: NotificationCoordinator | None = None
_INSTANCE_LOCK = threading.Lock()


def init_coordinator(**kwargs: Any) -> NotificationCoordinator:
    """Create the process-wide coordinator exactly once.

    Called at process start; the result is handed to every caller. A
    second call is a programming error: it is logged as critical and the
    existing coordinator is returned unchanged.

    Args:
        **kwargs: Forwarded to ``NotificationCoordinator``.
    """
    global _INSTANCE
    with _INSTANCE_LOCK:
        if _INSTANCE is None:
            _INSTANCE = NotificationCoordinator(**kwargs)
        else:
            _LOGGER.critical("init_coordinator() called multiple times! instance=%r", _INSTANCE)
        return _INSTANCE


def release_coordinator() -> None:
    """Forget the process-wide coordinator (process teardown and tests)."""
    global _INSTANCE
    with _INSTANCE_LOCK:
        _INSTANCE = None
