"""Text templates for alert payloads.

Localisation belongs to the host; the catalog is the seam it plugs into.
Templates use ``str.format`` fields.
"""

from __future__ import annotations

import string
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Final

from .errors import ConfigLoadError

DEFAULT_STRINGS: Final[Mapping[str, str]] = {
    "blacklist_title": "Blacklist",
    "blacklist_call": "Call from {number} blocked",
    "blacklist_call_private": "Call from private number blocked",
    "blacklist_call_unknown": "Call from unknown number blocked",
    "blacklist_call_multiple": "{count} calls blocked",
    "blacklist_message": "Message from {number} blocked",
    "blacklist_message_private": "Message from private number blocked",
    "blacklist_message_unknown": "Message from unknown number blocked",
    "blacklist_message_multiple": "{count} messages blocked",
    "blacklist_list_private": "Private number",
    "blacklist_line": "{identifier}  {time}",
    "unblock_number": "Unblock number",
    "voicemail_title": "New voicemail",
    "voicemail_title_count": "New voicemail ({count})",
    "voicemail_no_number": "Voicemail number unknown",
    "voicemail_dial": "Dial {number}",
    "call_forward_label": "Call forwarding",
    "call_forward_enabled": "Always forward",
    "network_selection_title": "No service from selected network",
    "network_selection_text": "Selected network ({operator}) unavailable",
    "roaming_title": "Data roaming",
    "roaming_reenable": (
        "You've lost data connectivity because you left your home network "
        "with data roaming turned off."
    ),
}

_TIME_FORMAT = "%H:%M"
_WEEKDAY_TIME_FORMAT = "%a %H:%M"


def _fields(template: str, key: str) -> set[str]:
    """Top-level replacement field names used by ``template``."""
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as err:
        raise ConfigLoadError(f"Invalid template for '{key}': {err}") from err
    names = set()
    for _, field_name, _, _ in parsed:
        if field_name is not None:
            names.add(field_name.split(".", 1)[0].split("[", 1)[0])
    return names


class StringCatalog:
    """Template lookup with optional per-key overrides."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        overrides = dict(overrides or {})
        unknown = sorted(set(overrides) - set(DEFAULT_STRINGS))
        if unknown:
            raise ConfigLoadError(f"Unknown string keys: {', '.join(unknown)}")
        for key, template in overrides.items():
            extra = _fields(template, key) - _fields(DEFAULT_STRINGS[key], key)
            if extra:
                raise ConfigLoadError(
                    f"String '{key}' uses unknown fields: {', '.join(sorted(extra))}"
                )
        self._strings = {**DEFAULT_STRINGS, **overrides}

    def get(self, key: str, **fields: Any) -> str:
        """Format the template for ``key``."""
        return self._strings[key].format(**fields)

    def format_time(self, when: datetime, now: datetime) -> str:
        """Short time of day, with the weekday when ``when`` is not today."""
        if when.date() == now.date():
            return when.strftime(_TIME_FORMAT)
        return when.strftime(_WEEKDAY_TIME_FORMAT)
