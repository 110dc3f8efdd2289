"""Configuration loading.

Configuration is data: a single YAML file with device capabilities,
feature switches, trace settings and string overrides. Every section is
optional.

Example::

    voice_capable: true
    blacklist:
      notify_enabled: true
    trace:
      enabled: false
      sample_rate: 1.0
    strings:
      blacklist_title: Blocked
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigLoadError
from .strings import StringCatalog
from .trace import TraceConfig


@dataclass
class NotifyConfig:
    """Runtime configuration for the notification coordinator.

    Attributes:
        voice_capable: Whether the device can place voice calls.
        blacklist_notify_enabled: Whether blocked calls/messages raise alerts.
        trace: Decision trace settings.
        strings: Text template overrides by key.
    """

    voice_capable: bool = True
    blacklist_notify_enabled: bool = True
    trace: TraceConfig = field(default_factory=TraceConfig)
    strings: dict[str, str] = field(default_factory=lambda: {})

    def string_catalog(self) -> StringCatalog:
        """Build the string catalog with this config's overrides."""
        return StringCatalog(self.strings)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file with error handling."""
    if not path.exists():
        raise ConfigLoadError(f"File not found: {path}")
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {path}: {err}") from err
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Expected a mapping at top level of {path}")
    return data


def parse_config(data: dict[str, Any]) -> NotifyConfig:
    """Build a NotifyConfig from already-parsed data."""
    blacklist = data.get("blacklist") or {}
    trace_data = data.get("trace") or {}

    sample_rate = float(trace_data.get("sample_rate", 1.0))
    if not 0.0 <= sample_rate <= 1.0:
        raise ConfigLoadError(f"trace.sample_rate must be 0.0-1.0, got {sample_rate}")

    strings = {str(k): str(v) for k, v in (data.get("strings") or {}).items()}
    config = NotifyConfig(
        voice_capable=bool(data.get("voice_capable", True)),
        blacklist_notify_enabled=bool(blacklist.get("notify_enabled", True)),
        trace=TraceConfig(
            enabled=bool(trace_data.get("enabled", False)),
            sample_rate=sample_rate,
        ),
        strings=strings,
    )
    # Fail early on unknown string keys or template fields.
    config.string_catalog()
    return config


def load_config(path: Path) -> NotifyConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Parsed NotifyConfig.

    Raises:
        ConfigLoadError: If the file is missing or malformed.
    """
    return parse_config(_load_yaml(path))
