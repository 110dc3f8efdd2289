"""Decision logic for phone status notifications.

Decides which persistent telephony alerts (blocked calls and messages,
voicemail, call forwarding, network selection, roaming) are visible, to
which user profiles, and with what content. Rendering is left to the host.
"""

__version__ = "0.1.0"

from .blacklist import BlacklistAggregator, unblock_allowed
from .categories import (
    ALL_USERS,
    NO_SUB_ID,
    ActionKind,
    AlertCategory,
    BlockMask,
    MatchType,
    RestrictionKind,
    ServiceState,
)
from .config import NotifyConfig, load_config, parse_config
from .coordinator import NotificationCoordinator, init_coordinator, release_coordinator
from .errors import ConfigLoadError, NotifyCoreError, UnresolvedReferenceError
from .fanout import FanoutDispatcher, FanoutRule, fanout_rule
from .indicators import CallForwardingIndicator, MessageWaitingIndicator
from .models import (
    AlertAction,
    AlertIdentity,
    AlertPayload,
    BlockedEvent,
    SubscriptionInfo,
    UserProfile,
)
from .network import NetworkSelectionWatchdog
from .ports import (
    NotificationShell,
    PhoneLine,
    PreferenceStore,
    SubscriptionDirectory,
    TelephonySource,
    UserDirectory,
)
from .strings import StringCatalog
from .trace import (
    BufferEmitter,
    CallbackEmitter,
    DecisionOutcome,
    DecisionRecord,
    NullEmitter,
    TraceConfig,
    TraceEmitter,
)

__all__ = [
    "ALL_USERS",
    "NO_SUB_ID",
    "ActionKind",
    "AlertAction",
    "AlertCategory",
    "AlertIdentity",
    "AlertPayload",
    "BlacklistAggregator",
    "BlockMask",
    "BlockedEvent",
    "BufferEmitter",
    "CallForwardingIndicator",
    "CallbackEmitter",
    "ConfigLoadError",
    "DecisionOutcome",
    "DecisionRecord",
    "FanoutDispatcher",
    "FanoutRule",
    "MatchType",
    "MessageWaitingIndicator",
    "NetworkSelectionWatchdog",
    "NotificationCoordinator",
    "NotificationShell",
    "NotifyConfig",
    "NotifyCoreError",
    "NullEmitter",
    "PhoneLine",
    "PreferenceStore",
    "RestrictionKind",
    "ServiceState",
    "StringCatalog",
    "SubscriptionDirectory",
    "SubscriptionInfo",
    "TelephonySource",
    "TraceConfig",
    "TraceEmitter",
    "UnresolvedReferenceError",
    "UserDirectory",
    "UserProfile",
    "__version__",
    "fanout_rule",
    "init_coordinator",
    "load_config",
    "parse_config",
    "release_coordinator",
    "unblock_allowed",
]
