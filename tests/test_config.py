"""Tests for configuration and string catalog loading."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from phone_notify_core.config import NotifyConfig, load_config, parse_config
from phone_notify_core.errors import ConfigLoadError
from phone_notify_core.strings import StringCatalog


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_full_file(self, tmp_path: Path) -> None:
        """Every section is parsed."""
        path = tmp_path / "notify.yaml"
        path.write_text(
            "voice_capable: false\n"
            "blacklist:\n"
            "  notify_enabled: false\n"
            "trace:\n"
            "  enabled: true\n"
            "  sample_rate: 0.25\n"
            "strings:\n"
            "  blacklist_title: Blocked\n"
        )

        config = load_config(path)

        assert not config.voice_capable
        assert not config.blacklist_notify_enabled
        assert config.trace.enabled
        assert config.trace.sample_rate == 0.25
        assert config.string_catalog().get("blacklist_title") == "Blocked"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """An empty file yields the default configuration."""
        path = tmp_path / "notify.yaml"
        path.write_text("")

        assert load_config(path) == NotifyConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a load error."""
        with pytest.raises(ConfigLoadError, match="File not found"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Malformed YAML is a load error."""
        path = tmp_path / "notify.yaml"
        path.write_text("trace: [unclosed\n")

        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """The top level must be a mapping."""
        path = tmp_path / "notify.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(path)

    def test_bad_sample_rate(self) -> None:
        """Sample rate must be a fraction."""
        with pytest.raises(ConfigLoadError, match="sample_rate"):
            parse_config({"trace": {"sample_rate": 2}})

    def test_unknown_string_key(self) -> None:
        """Overrides for unknown keys are rejected."""
        with pytest.raises(ConfigLoadError, match="no_such_key"):
            parse_config({"strings": {"no_such_key": "x"}})


class TestStringCatalog:
    """Test template formatting."""

    def test_override_applies(self) -> None:
        """Overrides replace defaults; other keys keep defaults."""
        catalog = StringCatalog({"blacklist_call": "Blocked {number}"})

        assert catalog.get("blacklist_call", number="1") == "Blocked 1"
        assert catalog.get("blacklist_message", number="1") == "Message from 1 blocked"

    def test_format_time_today(self) -> None:
        """Same-day times show hours and minutes only."""
        now = datetime(2026, 10, 19, 18, 0)
        assert StringCatalog().format_time(datetime(2026, 10, 19, 7, 5), now) == "07:05"

    def test_format_time_other_day(self) -> None:
        """Other days include the weekday."""
        now = datetime(2026, 10, 19, 18, 0)
        assert StringCatalog().format_time(datetime(2026, 10, 16, 7, 5), now) == "Fri 07:05"

    def test_override_with_unknown_field_rejected(self) -> None:
        """A template naming a field the caller never supplies is rejected."""
        with pytest.raises(ConfigLoadError, match="blacklist_call.*num"):
            StringCatalog({"blacklist_call": "Blocked {num}"})

    def test_override_may_drop_fields(self) -> None:
        """Templates can omit fields the default uses."""
        catalog = StringCatalog({"blacklist_call_multiple": "Calls blocked"})
        assert catalog.get("blacklist_call_multiple", count=3) == "Calls blocked"

    def test_malformed_template_rejected(self) -> None:
        """Unbalanced braces are a load error."""
        with pytest.raises(ConfigLoadError, match="Invalid template"):
            StringCatalog({"voicemail_dial": "Dial {number"})

    def test_bad_field_in_config_rejected(self) -> None:
        """Config loading refuses templates that would fail at render time."""
        with pytest.raises(ConfigLoadError, match="num"):
            parse_config({"strings": {"blacklist_call": "Blocked {num}"}})
