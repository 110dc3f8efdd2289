"""Enumerations shared across the notification core.

Alert categories keep the stable integer ids the host shell addresses
notifications by, so they are ``IntEnum`` members rather than plain enums.
"""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag
from typing import Final

# Subscription id meaning "no specific subscription" (single-SIM callers).
NO_SUB_ID: Final = -1

# Shell recipient meaning "every user profile on the device".
ALL_USERS: Final = -1


class AlertCategory(IntEnum):
    """Alert categories known to the notification shell."""

    MMI = 1
    NETWORK_SELECTION = 2
    VOICEMAIL = 3
    CALL_FORWARD = 4
    DATA_DISCONNECTED_ROAMING = 5
    SELECTED_OPERATOR_FAIL = 6
    BLACKLISTED_CALL = 7
    BLACKLISTED_MESSAGE = 8


class MatchType(Enum):
    """How a blocked call or message matched a blacklist rule."""

    LIST = "list"
    REGEX = "regex"
    PRIVATE = "private"
    UNKNOWN = "unknown"


class BlockMask(IntFlag):
    """Selects which blacklist categories an operation applies to."""

    NONE = 0
    CALLS = 1
    MESSAGES = 2
    ALL = CALLS | MESSAGES

    def categories(self) -> tuple[AlertCategory, ...]:
        """Alert categories selected by this mask, calls first."""
        selected: list[AlertCategory] = []
        if self & BlockMask.CALLS:
            selected.append(AlertCategory.BLACKLISTED_CALL)
        if self & BlockMask.MESSAGES:
            selected.append(AlertCategory.BLACKLISTED_MESSAGE)
        return tuple(selected)

    @classmethod
    def for_category(cls, category: AlertCategory) -> "BlockMask":
        """Mask bit for a blacklist category."""
        if category == AlertCategory.BLACKLISTED_CALL:
            return cls.CALLS
        if category == AlertCategory.BLACKLISTED_MESSAGE:
            return cls.MESSAGES
        return cls.NONE


class ServiceState(Enum):
    """Radio service state as reported by telephony."""

    IN_SERVICE = "in_service"
    OUT_OF_SERVICE = "out_of_service"
    EMERGENCY_ONLY = "emergency_only"
    POWER_OFF = "power_off"


class RestrictionKind(Enum):
    """User restrictions relevant to alert fanout."""

    DISALLOW_OUTGOING_CALLS = "no_outgoing_calls"


class ActionKind(Enum):
    """Abstract targets an alert can point at.

    The host turns these into concrete deep links; the core only decides
    which one applies.
    """

    BLACKLIST_SETTINGS = "blacklist_settings"
    CLEAR_BLACKLIST = "clear_blacklist"
    UNBLOCK_NUMBER = "unblock_number"
    DIAL_VOICEMAIL = "dial_voicemail"
    VOICEMAIL_SETTINGS = "voicemail_settings"
    CALL_FORWARD_SETTINGS = "call_forward_settings"
    NETWORK_OPERATOR_SETTINGS = "network_operator_settings"
    MOBILE_NETWORK_SETTINGS = "mobile_network_settings"
