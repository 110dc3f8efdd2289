"""Pytest configuration and fakes for phone_notify_core tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime

import pytest

from phone_notify_core.categories import RestrictionKind
from phone_notify_core.coordinator import NotificationCoordinator, release_coordinator
from phone_notify_core.config import NotifyConfig
from phone_notify_core.models import (
    AlertIdentity,
    AlertPayload,
    SubscriptionInfo,
    UserProfile,
)
from phone_notify_core.ports import (
    NotificationShell,
    PhoneLine,
    PreferenceStore,
    SubscriptionDirectory,
    TelephonySource,
    UserDirectory,
)
from phone_notify_core.strings import StringCatalog
from phone_notify_core.trace import BufferEmitter, TraceConfig

NOW = datetime(2026, 10, 19, 14, 30)

OWNER = UserProfile(handle=0, is_owner=True)
SECONDARY = UserProfile(handle=10)
MANAGED = UserProfile(handle=11, is_managed_profile=True)
NO_CALLS = UserProfile(
    handle=12,
    restrictions=frozenset({RestrictionKind.DISALLOW_OUTGOING_CALLS}),
)


class FakeShell(NotificationShell):
    """Records every shell call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, AlertIdentity | None, int | None]] = []
        self.presented: list[tuple[AlertIdentity, AlertPayload, int]] = []
        self.cancelled: list[tuple[AlertIdentity, int]] = []
        self.transients: list[str] = []

    def present(self, identity: AlertIdentity, payload: AlertPayload, user: int) -> None:
        self.calls.append(("present", identity, user))
        self.presented.append((identity, payload, user))

    def cancel(self, identity: AlertIdentity, user: int) -> None:
        self.calls.append(("cancel", identity, user))
        self.cancelled.append((identity, user))

    def show_transient(self, text: str) -> None:
        self.calls.append(("show_transient", None, None))
        self.transients.append(text)

    def cancel_transient(self) -> None:
        self.calls.append(("cancel_transient", None, None))

    def payloads_for(self, user: int) -> list[AlertPayload]:
        return [payload for _, payload, handle in self.presented if handle == user]

    def reset(self) -> None:
        self.calls.clear()
        self.presented.clear()
        self.cancelled.clear()
        self.transients.clear()


@dataclass
class FakeSubscriptions(SubscriptionDirectory):
    subs: dict[int, SubscriptionInfo] = field(default_factory=dict)

    def resolve(self, sub_id: int) -> SubscriptionInfo | None:
        return self.subs.get(sub_id)

    def active_count(self) -> int:
        return sum(1 for info in self.subs.values() if info.active)


@dataclass
class FakePhone(PhoneLine):
    vm_number: str | None = "+15550100"
    count: int = 0
    records_loaded: bool = True
    supports_count: bool = False
    vibrate: bool = False

    def voicemail_number(self) -> str | None:
        return self.vm_number

    def voicemail_count(self) -> int:
        return self.count

    def icc_records_loaded(self) -> bool:
        return self.records_loaded

    def supports_voicemail_count(self) -> bool:
        return self.supports_count

    def voicemail_vibration_enabled(self) -> bool:
        return self.vibrate


@dataclass
class FakeTelephony(TelephonySource):
    phones: dict[int, FakePhone] = field(default_factory=dict)
    default_sub: int = 7
    network_selection: bool = True

    def phone(self, sub_id: int) -> PhoneLine | None:
        return self.phones.get(sub_id)

    def default_sub_id(self) -> int:
        return self.default_sub

    def supports_network_selection(self) -> bool:
        return self.network_selection


@dataclass
class FakePreferences(PreferenceStore):
    values: dict[str, str] = field(default_factory=dict)

    def get_string(self, key: str, default: str = "") -> str:
        return self.values.get(key, default)


@dataclass
class FakeUsers(UserDirectory):
    profiles: list[UserProfile] = field(default_factory=list)

    def list_profiles(self) -> Sequence[UserProfile]:
        return list(self.profiles)


@pytest.fixture
def strings() -> StringCatalog:
    return StringCatalog()


@pytest.fixture
def shell() -> FakeShell:
    return FakeShell()


@pytest.fixture
def subscriptions() -> FakeSubscriptions:
    return FakeSubscriptions(
        subs={7: SubscriptionInfo(sub_id=7, display_name="Carrier A", icon_tint=0xFF00AA00)}
    )


@pytest.fixture
def telephony() -> FakeTelephony:
    return FakeTelephony(phones={7: FakePhone()})


@pytest.fixture
def preferences() -> FakePreferences:
    return FakePreferences()


@pytest.fixture
def users() -> FakeUsers:
    return FakeUsers(profiles=[OWNER, SECONDARY, MANAGED, NO_CALLS])


@pytest.fixture
def emitter() -> BufferEmitter:
    return BufferEmitter()


@pytest.fixture
def coordinator(
    shell: FakeShell,
    subscriptions: FakeSubscriptions,
    telephony: FakeTelephony,
    preferences: FakePreferences,
    users: FakeUsers,
    emitter: BufferEmitter,
) -> NotificationCoordinator:
    """Coordinator wired to fakes with tracing on."""
    return NotificationCoordinator(
        shell=shell,
        subscriptions=subscriptions,
        telephony=telephony,
        preferences=preferences,
        users=users,
        config=NotifyConfig(trace=TraceConfig(enabled=True)),
        emitter=emitter,
        clock=lambda: NOW,
    )


@pytest.fixture(autouse=True)
def _release_singleton() -> Iterator[None]:
    """Each test starts without a process-wide coordinator."""
    release_coordinator()
    yield
    release_coordinator()
