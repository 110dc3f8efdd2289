"""Network-related alerts.

The network selection watchdog shows a "selected operator unavailable"
alert while the phone is out of service with a manually selected
operator. A latch remembers whether the alert is showing so repeated
identical service-state events never re-show or re-cancel it.

The roaming alert is stateless: shown when data is cut off while
roaming, hidden when it comes back.
"""

from __future__ import annotations

import logging

from .categories import ActionKind, AlertCategory, ServiceState
from .fanout import FanoutDispatcher
from .models import AlertAction, AlertIdentity, AlertPayload
from .ports import PreferenceStore, TelephonySource
from .strings import StringCatalog
from .trace import DecisionOutcome, DecisionTracer

_LOGGER = logging.getLogger(__name__)


def render_network_selection(strings: StringCatalog, operator: str) -> AlertPayload:
    """Payload for the selected-operator-unavailable alert."""
    return AlertPayload(
        identity=AlertIdentity(AlertCategory.SELECTED_OPERATOR_FAIL),
        title=strings.get("network_selection_title"),
        body=strings.get("network_selection_text", operator=operator),
        content_action=AlertAction(kind=ActionKind.NETWORK_OPERATOR_SETTINGS),
        ongoing=True,
    )


def render_roaming_disconnected(strings: StringCatalog) -> AlertPayload:
    """Payload for the data-disconnected-while-roaming alert."""
    return AlertPayload(
        identity=AlertIdentity(AlertCategory.DATA_DISCONNECTED_ROAMING),
        title=strings.get("roaming_title"),
        body=strings.get("roaming_reenable"),
        content_action=AlertAction(kind=ActionKind.MOBILE_NETWORK_SETTINGS),
    )


class NetworkSelectionWatchdog:
    """Latched selected-operator-unavailable alert."""

    category = AlertCategory.SELECTED_OPERATOR_FAIL

    def __init__(
        self,
        *,
        telephony: TelephonySource,
        preferences: PreferenceStore,
        fanout: FanoutDispatcher,
        strings: StringCatalog,
        tracer: DecisionTracer,
    ) -> None:
        self._telephony = telephony
        self._preferences = preferences
        self._fanout = fanout
        self._strings = strings
        self._tracer = tracer
        self._showing = False

    @property
    def showing(self) -> bool:
        """Latch: whether the alert is currently shown."""
        return self._showing

    def update(self, service_state: ServiceState) -> None:
        """Re-evaluate the alert for a new service state."""
        if not self._telephony.supports_network_selection():
            return

        sub_id = self._telephony.default_sub_id()
        if sub_id < 0:
            _LOGGER.debug(
                "Network selection state=%s not updated, invalid subId %s",
                service_state.value,
                sub_id,
            )
            return

        selection = self._preferences.manual_selection(sub_id)
        _LOGGER.debug(
            "[sub %s] Network selection state=%s selection=%r",
            sub_id,
            service_state.value,
            selection,
        )

        if service_state == ServiceState.OUT_OF_SERVICE and selection:
            if not self._showing:
                recipients = self._fanout.present(
                    self.category,
                    None,
                    render_network_selection(self._strings, selection),
                    owner_only_action=True,
                )
                self._showing = True
                self._tracer.record(
                    self.category, DecisionOutcome.PRESENTED, sub_id=sub_id, recipients=recipients
                )
        elif self._showing:
            self._fanout.cancel(self.category)
            self._showing = False
            self._tracer.record(self.category, DecisionOutcome.CANCELLED, sub_id=sub_id)
