"""Tests for the settings model and the default merge."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from copilot_settings.config import DEFAULT_SETTINGS, Hotkeys, Settings, merge


def test_defaults():
    s = Settings()
    assert s.binary_path == "default"
    assert s.enabled is True
    assert s.hotkeys == Hotkeys(accept="Tab", cancel="Escape")


def test_settings_are_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_SETTINGS.enabled = False  # type: ignore[misc]


def test_to_data_uses_persisted_key_names():
    assert Settings().to_data() == {
        "binaryPath": "default",
        "enabled": True,
        "hotkeys": {"accept": "Tab", "cancel": "Escape"},
    }


# --- merge ---


def test_merge_none_returns_defaults():
    assert merge(DEFAULT_SETTINGS, None) == DEFAULT_SETTINGS


def test_merge_empty_mapping_returns_defaults():
    assert merge(DEFAULT_SETTINGS, {}) == DEFAULT_SETTINGS


@pytest.mark.parametrize(
    "partial",
    [
        {"binaryPath": "/usr/local/bin/node"},
        {"enabled": False},
        {"hotkeys": {"accept": "Ctrl-Enter"}},
        {"hotkeys": {}},
        {"binaryPath": "node20", "hotkeys": {"cancel": "Ctrl-G"}},
    ],
)
def test_merge_partial_populates_every_field(partial):
    """Present values win, everything else comes from the defaults."""
    s = merge(DEFAULT_SETTINGS, partial)
    assert s.binary_path == partial.get("binaryPath", "default")
    assert s.enabled is partial.get("enabled", True)
    hotkeys = partial.get("hotkeys", {})
    assert s.hotkeys.accept == hotkeys.get("accept", "Tab")
    assert s.hotkeys.cancel == hotkeys.get("cancel", "Escape")


def test_merge_accepts_legacy_node_path_key():
    s = merge(DEFAULT_SETTINGS, {"nodePath": "/opt/node18/bin/node"})
    assert s.binary_path == "/opt/node18/bin/node"


def test_merge_prefers_binary_path_over_legacy_key():
    s = merge(DEFAULT_SETTINGS, {"nodePath": "old", "binaryPath": "new"})
    assert s.binary_path == "new"


def test_merge_ignores_unknown_keys():
    s = merge(DEFAULT_SETTINGS, {"theme": "dark", "enabled": False})
    assert s.enabled is False
    assert "theme" not in s.to_data()


def test_merge_does_not_touch_inputs():
    partial = {"hotkeys": {"accept": "F2"}}
    merge(DEFAULT_SETTINGS, partial)
    assert partial == {"hotkeys": {"accept": "F2"}}
    assert DEFAULT_SETTINGS.hotkeys.accept == "Tab"


def test_merge_over_non_default_base():
    base = Settings(binary_path="/usr/bin/node", hotkeys=Hotkeys(accept="F2"))
    s = merge(base, {"hotkeys": {"cancel": "F3"}})
    assert s.binary_path == "/usr/bin/node"
    assert s.hotkeys == Hotkeys(accept="F2", cancel="F3")


def test_merge_with_settings_instance():
    other = Settings(enabled=False)
    assert merge(DEFAULT_SETTINGS, other) == other


def test_merge_rejects_wrong_types():
    with pytest.raises(ValidationError):
        merge(DEFAULT_SETTINGS, {"hotkeys": "Tab"})


def test_empty_hotkey_rejected():
    with pytest.raises(ValidationError):
        merge(DEFAULT_SETTINGS, {"hotkeys": {"accept": ""}})
