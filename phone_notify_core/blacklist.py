"""Blocked call and message aggregation.

Each blacklist category keeps every blocked event since it was last
cleared, newest first, and renders them as one alert. A single event gets
a per-match-type body; several events get a grouped alert with one line
per event.

Unblock gating: only ``MatchType.LIST`` matches are bound to a concrete
number that can be unblocked. A grouped alert can carry just one unblock
action, so it is offered only when every grouped event is a LIST match on
the most recent number.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from .categories import ActionKind, AlertCategory, BlockMask, MatchType
from .models import AlertAction, AlertIdentity, AlertPayload, BlockedEvent
from .strings import StringCatalog

BLACKLIST_CATEGORIES: tuple[AlertCategory, ...] = (
    AlertCategory.BLACKLISTED_CALL,
    AlertCategory.BLACKLISTED_MESSAGE,
)


def _string_prefix(category: AlertCategory) -> str:
    match category:
        case AlertCategory.BLACKLISTED_CALL:
            return "blacklist_call"
        case AlertCategory.BLACKLISTED_MESSAGE:
            return "blacklist_message"
        case _:
            raise ValueError(f"Not a blacklist category: {category!r}")


def unblock_allowed(events: Sequence[BlockedEvent]) -> bool:
    """Whether a single unblock action is unambiguous for ``events``.

    ``events`` is newest first. An empty sequence never allows unblocking.
    """
    if not events:
        return False
    newest = events[0]
    return all(
        event.number == newest.number and event.match_type == MatchType.LIST
        for event in events
    )


class BlacklistAggregator:
    """Per-category record of recent blocked events.

    Usage:
        aggregator = BlacklistAggregator(StringCatalog())
        payload = aggregator.record(AlertCategory.BLACKLISTED_CALL, "5551234", now, MatchType.LIST)
        aggregator.clear(AlertCategory.BLACKLISTED_CALL)
    """

    def __init__(
        self,
        strings: StringCatalog,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._strings = strings
        self._clock = clock
        self._events: dict[AlertCategory, list[BlockedEvent]] = {
            category: [] for category in BLACKLIST_CATEGORIES
        }

    def _bucket(self, category: AlertCategory) -> list[BlockedEvent]:
        try:
            return self._events[category]
        except KeyError:
            raise ValueError(f"Not a blacklist category: {category!r}") from None

    def events(self, category: AlertCategory) -> tuple[BlockedEvent, ...]:
        """Recorded events for ``category``, newest first."""
        return tuple(self._bucket(category))

    def record(
        self,
        category: AlertCategory,
        number: str | None,
        timestamp: datetime,
        match_type: MatchType,
    ) -> AlertPayload:
        """Record a blocked event and return the category's new payload."""
        event = BlockedEvent(number=number or "", timestamp=timestamp, match_type=match_type)
        bucket = self._bucket(category)
        bucket.insert(0, event)
        return self._render_events(category, bucket)

    def clear(self, category: AlertCategory) -> int:
        """Forget every event in ``category``; returns how many were dropped."""
        bucket = self._bucket(category)
        dropped = len(bucket)
        bucket.clear()
        return dropped

    def render(self, category: AlertCategory) -> AlertPayload | None:
        """Current alert for ``category``, or None when it has no events."""
        events = self._bucket(category)
        if not events:
            return None
        return self._render_events(category, events)

    def _render_events(
        self, category: AlertCategory, events: Sequence[BlockedEvent]
    ) -> AlertPayload:
        prefix = _string_prefix(category)
        newest = events[0]

        if len(events) == 1:
            body = self._single_body(prefix, newest)
            lines: tuple[str, ...] = ()
            group_count = None
            action_enabled = newest.match_type == MatchType.LIST
        else:
            body = self._strings.get(f"{prefix}_multiple", count=len(events))
            lines = tuple(self._format_line(event) for event in events)
            group_count = len(events)
            action_enabled = unblock_allowed(events)

        actions: tuple[AlertAction, ...] = ()
        if action_enabled:
            actions = (
                AlertAction(
                    kind=ActionKind.UNBLOCK_NUMBER,
                    label=self._strings.get("unblock_number"),
                    target=newest.number,
                ),
            )

        mask = BlockMask.for_category(category)
        return AlertPayload(
            identity=AlertIdentity(category),
            title=self._strings.get("blacklist_title"),
            body=body,
            lines=lines,
            group_count=group_count,
            action_enabled=action_enabled,
            content_action=AlertAction(kind=ActionKind.BLACKLIST_SETTINGS),
            actions=actions,
            dismiss_action=AlertAction(kind=ActionKind.CLEAR_BLACKLIST, target=mask.name),
            when=newest.timestamp,
        )

    def _single_body(self, prefix: str, event: BlockedEvent) -> str:
        match event.match_type:
            case MatchType.PRIVATE:
                return self._strings.get(f"{prefix}_private")
            case MatchType.UNKNOWN:
                return self._strings.get(f"{prefix}_unknown")
            case _:
                return self._strings.get(prefix, number=event.number)

    def _format_line(self, event: BlockedEvent) -> str:
        identifier = event.number or self._strings.get("blacklist_list_private")
        when = self._strings.format_time(event.timestamp, self._clock())
        return self._strings.get("blacklist_line", identifier=identifier, time=when)
